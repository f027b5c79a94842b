#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : services/filter.py
@Description: 阈值筛选
              - 双条件：总利润 >= 金额阈值 且 盈利倍数 >= 倍数阈值
              - 分档：先判高档，再判中档，一个钱包只会落在一个档位
"""
from typing import Iterable, List, Optional

from core.models import DualConditionPolicy, FilteredResult, FilterPolicy, Tier, TieredPolicy, WalletRecord


def classify_tier(profit_ratio: float, policy: TieredPolicy) -> Optional[Tier]:
    """
    判定档位

    Returns:
        Tier.HIGH / Tier.MEDIUM，不达标返回 None
    """
    if profit_ratio >= policy.high_threshold:
        return Tier.HIGH
    if profit_ratio >= policy.medium_threshold:
        return Tier.MEDIUM
    return None


def filter_records(records: Iterable[WalletRecord], policy: FilterPolicy) -> List[FilteredResult]:
    """
    按策略筛选钱包 (保持输入顺序)

    Args:
        records: 解析后的钱包记录
        policy: DualConditionPolicy 或 TieredPolicy

    Returns:
        筛选通过的结果；分档模式下每条结果带 tier
    """
    results = []

    if isinstance(policy, DualConditionPolicy):
        for r in records:
            if r.total_profit >= policy.profit_amount_threshold and r.profit_ratio >= policy.profit_ratio_threshold:
                results.append(FilteredResult(r.wallet, r.total_profit, r.profit_ratio))
    elif isinstance(policy, TieredPolicy):
        for r in records:
            tier = classify_tier(r.profit_ratio, policy)
            if tier is not None:
                results.append(FilteredResult(r.wallet, r.total_profit, r.profit_ratio, tier))
    else:
        raise TypeError(f"未知的筛选策略: {type(policy).__name__}")

    return results
