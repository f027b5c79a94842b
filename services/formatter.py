#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : services/formatter.py
@Description: 输出格式化
              单行格式：钱包地址:代币名称盈利钱包后3位
              完整文本：双条件模式逐行拼接；分档模式按档位分节，每节带表头，空档整节省略
"""
from typing import List

from core.models import Artifact, DualConditionPolicy, FilteredResult, ResultGroup

WALLET_SUFFIX_LEN = 3


def format_number(value: float) -> str:
    """阈值显示：整数不带小数点 (10.0 -> "10")，其余原样 (2.5 -> "2.5")"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def wallet_suffix(wallet: str) -> str:
    """钱包后 3 位；不足 3 位返回整个字符串"""
    return wallet[-WALLET_SUFFIX_LEN:]


def format_line(result: FilteredResult, token_name: str) -> str:
    return f"{result.wallet}:{token_name}盈利{wallet_suffix(result.wallet)}"


def tier_header(group: ResultGroup) -> str:
    return f"=== 盈利倍数 ≥ {format_number(group.threshold)}x ({len(group)}个) ==="


def assemble_text(groups: List[ResultGroup], token_name: str) -> str:
    """
    拼接完整输出文本

    Args:
        groups: rank_results 的输出
        token_name: 代币名称

    Returns:
        可复制/导出的文本；没有任何结果时为空字符串
    """
    sections = []
    for group in groups:
        if not group.results:
            continue
        lines = [format_line(r, token_name) for r in group.results]
        if group.tier is not None:
            lines.insert(0, tier_header(group))
        sections.append("\n".join(lines))

    # 分节之间空一行
    return "\n\n".join(sections)


def summary_lines(artifact: Artifact) -> List[str]:
    """筛选条件与数量统计 (仅用于展示，不进入导出文本)"""
    policy = artifact.policy
    if isinstance(policy, DualConditionPolicy):
        return [
            f"数据量: {artifact.record_count}",
            f"筛选结果 (利润≥{format_number(policy.profit_amount_threshold)} & "
            f"倍数≥{format_number(policy.profit_ratio_threshold)}x): {artifact.result_count} 个",
        ]

    high, medium = artifact.tier_counts()
    high_str = format_number(policy.high_threshold)
    medium_str = format_number(policy.medium_threshold)
    return [
        f"总数据量: {artifact.record_count}",
        f"高倍数(≥{high_str}x): {high}个",
        f"中倍数({medium_str}x-{high_str}x): {medium}个",
    ]


def preview_lines(artifact: Artifact) -> List[str]:
    """
    带序号和指标的预览 (仅用于展示)

    双条件模式: "1. 行  $1234  5.67x"
    分档模式:   "1. 行  (12.34x)"，按档位连续编号
    """
    lines = []
    index = 1
    dual = isinstance(artifact.policy, DualConditionPolicy)
    for group in artifact.groups:
        for r in group.results:
            line = format_line(r, artifact.token_name)
            if dual:
                lines.append(f"{index}. {line}  ${r.total_profit:.0f}  {r.profit_ratio:.2f}x")
            else:
                lines.append(f"{index}. {line}  ({r.profit_ratio:.2f}x)")
            index += 1
    return lines
