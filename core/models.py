#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : core/models.py
@Description: 数据模型
              - WalletRecord: 导入表格的一行
              - FilterPolicy: 双条件 / 分档 两种筛选策略 (显式选择，互斥)
              - FilteredResult / ResultGroup / Artifact: 筛选、排序、格式化的产物
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class WalletRecord:
    """
    单个钱包的交易统计 (表格中的一行)

    Attributes:
        wallet: 钱包地址 (已去除首尾空白，非空)
        total_profit: 总利润 (盈利金额)
        profit_ratio: 总盈亏 (盈利倍数)
        buy_count: 买入次数
        sell_count: 卖出次数
        buy_amount: 买入金额
        sell_amount: 卖出金额
    """
    wallet: str
    total_profit: float = 0.0
    profit_ratio: float = 0.0
    buy_count: int = 0
    sell_count: int = 0
    buy_amount: float = 0.0
    sell_amount: float = 0.0


class Tier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class DualConditionPolicy:
    """双条件模式：总利润 >= amount 且 盈利倍数 >= ratio (均含边界)"""
    profit_amount_threshold: float = 1000.0
    profit_ratio_threshold: float = 5.0


@dataclass(frozen=True)
class TieredPolicy:
    """
    分档模式：倍数 >= high 为高档，否则 >= medium 为中档，否则淘汰

    不要求 high > medium，也不要求非负。
    """
    high_threshold: float = 10.0
    medium_threshold: float = 5.0


FilterPolicy = Union[DualConditionPolicy, TieredPolicy]


@dataclass(frozen=True)
class FilteredResult:
    """筛选通过的钱包 (仅保留输出需要的字段)"""
    wallet: str
    total_profit: float
    profit_ratio: float
    tier: Optional[Tier] = None


@dataclass
class ResultGroup:
    """
    一组排好序的结果

    双条件模式只有一组 (tier 为 None)；分档模式高档、中档各一组，threshold 为该档的门槛。
    """
    results: List[FilteredResult] = field(default_factory=list)
    tier: Optional[Tier] = None
    threshold: Optional[float] = None

    def __len__(self) -> int:
        return len(self.results)


@dataclass
class Artifact:
    """
    一次计算的完整产物

    Attributes:
        text: 可复制/导出的文本 (空字符串表示没有可导出的数据)
        groups: 排序后的结果分组
        policy: 生成该产物的筛选策略
        token_name: 使用的代币名称
        record_count: 参与计算的数据量
    """
    text: str
    groups: List[ResultGroup]
    policy: "FilterPolicy"
    token_name: str
    record_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def result_count(self) -> int:
        return sum(len(g) for g in self.groups)

    def tier_counts(self) -> Tuple[int, int]:
        """(高档数量, 中档数量)；双条件模式返回 (0, 0)"""
        high = sum(len(g) for g in self.groups if g.tier is Tier.HIGH)
        medium = sum(len(g) for g in self.groups if g.tier is Tier.MEDIUM)
        return high, medium
