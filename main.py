#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : main.py
@Description: 钱包盈利分析工具 (命令行入口)
              导入 CSV/Excel -> 按阈值筛选 -> 排序 -> 输出 "钱包地址:代币名称盈利后3位"

Examples:
  python main.py Top收益.csv
  python main.py Top收益.xlsx --token 梗王 --min-profit 2000 --min-ratio 8 --save
  python main.py Top收益.csv --mode tiered --high 10 --medium 5 --copy
"""
import argparse
import asyncio
import sys
from typing import Optional, Sequence

from config.settings import (FILTER_MODE, FILTER_MODES, HIGH_THRESHOLD, LOG_TO_FILE, MEDIUM_THRESHOLD,
                             PROFIT_AMOUNT_THRESHOLD, PROFIT_RATIO_THRESHOLD, RESULTS_DIR, TOKEN_NAME)
from core.exceptions import ReadError
from core.models import DualConditionPolicy, FilterPolicy, TieredPolicy
from core.pipeline import WalletProfitSession
from services.formatter import preview_lines, summary_lines
from utils.logger import logger, today_log_file

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_READ_ERROR = 2
EXIT_PARSE_ERROR = 3
EXIT_EXPORT_FAILED = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="钱包盈利分析工具：按盈利金额/盈利倍数筛选钱包并生成复制列表")
    parser.add_argument("file", help="CSV 或 xlsx 文件 (第一行为表头)")
    parser.add_argument("-t", "--token", default=TOKEN_NAME, help=f"代币名称 (默认: {TOKEN_NAME})")
    parser.add_argument("-m", "--mode", choices=FILTER_MODES, default=FILTER_MODE,
                        help="dual=金额+倍数双条件，tiered=按倍数分高/中两档")
    parser.add_argument("--min-profit", type=float, default=PROFIT_AMOUNT_THRESHOLD, help="盈利金额阈值 (总利润)")
    parser.add_argument("--min-ratio", type=float, default=PROFIT_RATIO_THRESHOLD, help="盈利倍数阈值 (总盈亏)")
    parser.add_argument("--high", type=float, default=HIGH_THRESHOLD, help="分档模式：高倍数阈值")
    parser.add_argument("--medium", type=float, default=MEDIUM_THRESHOLD, help="分档模式：中倍数阈值")
    parser.add_argument("--copy", action="store_true", help="复制结果到剪贴板")
    parser.add_argument("--save", action="store_true", help="保存结果为 txt 文件")
    parser.add_argument("-o", "--output-dir", default=RESULTS_DIR, help=f"保存目录 (默认: {RESULTS_DIR})")
    parser.add_argument("--no-preview", action="store_true", help="不打印带指标的预览，只打印最终文本")
    return parser


def policy_from_args(args: argparse.Namespace) -> FilterPolicy:
    if args.mode == "tiered":
        return TieredPolicy(args.high, args.medium)
    return DualConditionPolicy(args.min_profit, args.min_ratio)


async def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    执行一次完整流程

    Returns:
        进程退出码 (0 成功；1 没有符合条件的数据且要求导出；2 读取失败；3 解析失败；4 复制/保存失败)
    """
    args = build_parser().parse_args(argv)
    session = WalletProfitSession(policy_from_args(args), args.token)

    if not await session.import_file(args.file):
        return EXIT_READ_ERROR if isinstance(session.last_error, ReadError) else EXIT_PARSE_ERROR

    artifact = session.artifact
    for line in summary_lines(artifact):
        print(line)

    if artifact.is_empty:
        print("\n🏁 没有符合条件的钱包，请调整筛选条件")
        if args.copy or args.save:
            logger.warning("⚠️ 没有可导出的数据，已跳过复制/保存")
            return EXIT_EMPTY
        return EXIT_OK

    if not args.no_preview:
        print("\n📊 筛选结果:")
        for line in preview_lines(artifact):
            print(f"  {line}")

    print("\n📄 输出预览:")
    print(artifact.text)

    exit_code = EXIT_OK
    if args.copy and not session.copy_to_clipboard():
        exit_code = EXIT_EXPORT_FAILED
    if args.save:
        output_file = session.export_file(args.output_dir)
        if output_file:
            print(f"\n✅ 已保存: {output_file}")
        else:
            exit_code = EXIT_EXPORT_FAILED

    if LOG_TO_FILE:
        logger.debug(f"日志文件: {today_log_file()}")
    return exit_code


def main():
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
