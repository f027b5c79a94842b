#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : services/ranker.py
@Description: 结果排序 (降序、稳定：指标相同的钱包保持导入顺序)
"""
from typing import List

from core.models import DualConditionPolicy, FilteredResult, FilterPolicy, ResultGroup, Tier


def rank_results(results: List[FilteredResult], policy: FilterPolicy) -> List[ResultGroup]:
    """
    分组并排序

    - 双条件模式：一组，按总利润降序
    - 分档模式：高档、中档两组 (始终两组，可能为空)，各自按盈利倍数降序

    sorted(reverse=True) 是稳定排序，相同指标的结果保持原先的相对顺序。
    """
    if isinstance(policy, DualConditionPolicy):
        ranked = sorted(results, key=lambda r: r.total_profit, reverse=True)
        return [ResultGroup(ranked)]

    groups = []
    for tier, threshold in ((Tier.HIGH, policy.high_threshold), (Tier.MEDIUM, policy.medium_threshold)):
        members = [r for r in results if r.tier is tier]
        groups.append(ResultGroup(sorted(members, key=lambda r: r.profit_ratio, reverse=True), tier, threshold))
    return groups
