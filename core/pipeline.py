#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : core/pipeline.py
@Description: 核心流程 解析 -> 筛选 -> 排序 -> 格式化
              - compute(): 纯函数，数据或配置任何变化都直接重算
              - WalletProfitSession: 持有当前数据集和当前配置，负责导入与导出
"""
import asyncio
import os
from typing import List, Optional, Sequence

from config.settings import (FILTER_MODE, HIGH_THRESHOLD, MEDIUM_THRESHOLD, PROFIT_AMOUNT_THRESHOLD,
                             PROFIT_RATIO_THRESHOLD, RESULTS_DIR, TOKEN_NAME)
from core.exceptions import ParseError, ReadError, WalletFilterError
from core.models import Artifact, DualConditionPolicy, FilterPolicy, TieredPolicy, WalletRecord
from services.exporter import ResultExporter
from services.filter import filter_records
from services.formatter import assemble_text
from services.parser import RecordParser, read_source
from services.ranker import rank_results
from utils.logger import logger


def default_policy(mode: str = FILTER_MODE) -> FilterPolicy:
    """按 .env 配置生成默认筛选策略"""
    if mode == "tiered":
        return TieredPolicy(HIGH_THRESHOLD, MEDIUM_THRESHOLD)
    return DualConditionPolicy(PROFIT_AMOUNT_THRESHOLD, PROFIT_RATIO_THRESHOLD)


def compute(records: Sequence[WalletRecord], policy: FilterPolicy, token_name: str) -> Artifact:
    """
    完整计算一次产物

    Args:
        records: 当前数据集
        policy: 筛选策略
        token_name: 代币名称

    Returns:
        Artifact (text 为空表示没有可导出的数据)
    """
    results = filter_records(records, policy)
    groups = rank_results(results, policy)
    text = assemble_text(groups, token_name)
    return Artifact(text=text, groups=groups, policy=policy, token_name=token_name, record_count=len(records))


class WalletProfitSession:
    """
    会话：当前数据集 + 当前配置

    职责：
    - 导入文件 (整体替换数据集；失败时保留旧数据)
    - 同一时间只认最新一次导入，过期的导入结果直接丢弃
    - 每次取 artifact 都重新计算，不做缓存
    """

    def __init__(self, policy: Optional[FilterPolicy] = None, token_name: str = TOKEN_NAME,
                 parser: Optional[RecordParser] = None):
        self.parser = parser or RecordParser()
        self.policy: FilterPolicy = policy or default_policy()
        self.records: List[WalletRecord] = []
        self.source = ""
        self._token_name = TOKEN_NAME
        self.token_name = token_name
        self._generation = 0
        # 最近一次导入失败的原因 (成功时清空)
        self.last_error: Optional[WalletFilterError] = None

    @property
    def token_name(self) -> str:
        return self._token_name

    @token_name.setter
    def token_name(self, value: str):
        # 空白名称回落到默认代币名
        value = (value or "").strip()
        self._token_name = value or TOKEN_NAME

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def artifact(self) -> Artifact:
        return compute(self.records, self.policy, self.token_name)

    def set_policy(self, policy: FilterPolicy):
        self.policy = policy

    def _next_ticket(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, ticket: int, source: str) -> bool:
        if ticket != self._generation:
            logger.info(f"⏭️ 导入已被更新的文件取代，丢弃结果: {source}")
            return True
        return False

    def _reject(self, ticket: int, error: WalletFilterError, message: str) -> bool:
        if not self._is_stale(ticket, error.source):
            logger.error(message)
            self.last_error = error
        return False

    def _apply(self, ticket: int, records: List[WalletRecord], source: str) -> bool:
        if self._is_stale(ticket, source):
            return False

        self.records = records
        self.source = source
        self.last_error = None
        logger.info(f"✅ 成功导入 {len(records)} 条钱包数据 ({source})")
        return True

    def import_bytes(self, data: bytes, source: str = "") -> bool:
        """
        从内存字节导入

        Returns:
            是否导入成功 (解析失败时旧数据保持不变)
        """
        ticket = self._next_ticket()
        try:
            records = self.parser.parse(data, source=source)
        except ParseError as e:
            return self._reject(ticket, e, f"❌ 文件解析失败，请检查文件格式: {source} ({e})")
        return self._apply(ticket, records, source)

    async def import_file(self, path: str) -> bool:
        """
        从文件导入 (读取放到线程池，不阻塞事件循环)

        Returns:
            是否导入成功；读取失败、解析失败或被更新的导入取代时返回 False
        """
        ticket = self._next_ticket()
        source = os.path.basename(path)
        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, read_source, path)
            records = self.parser.parse(data, source=source)
        except ReadError as e:
            return self._reject(ticket, e, f"❌ 文件读取失败: {path} ({e})")
        except ParseError as e:
            return self._reject(ticket, e, f"❌ 文件解析失败，请检查文件格式: {path} ({e})")
        return self._apply(ticket, records, source)

    def copy_to_clipboard(self) -> bool:
        return ResultExporter.copy_to_clipboard(self.artifact)

    def export_file(self, output_dir: str = RESULTS_DIR) -> Optional[str]:
        return ResultExporter.export_file(self.artifact, output_dir)
