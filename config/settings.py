#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : settings.py
@Description: 全局配置 (支持 .env 动态调整)
"""
# config/settings.py
import os
from pathlib import Path

# 获取项目根目录
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

from dotenv import load_dotenv

load_dotenv(dotenv_path=ENV_PATH)

# --- 输出模板 ---
# 输出格式：钱包地址:代币名称盈利钱包后3位
TOKEN_NAME = os.getenv("TOKEN_NAME", "梗王")
OUTPUT_FILE_SUFFIX = "_盈利分析结果.txt"

# --- 筛选配置 (支持动态调整) ---
# 强制转换为 float，防止从 .env 读取到字符串导致比较错误
# 双条件模式：总利润 >= 金额阈值 且 盈利倍数 >= 倍数阈值
PROFIT_AMOUNT_THRESHOLD = float(os.getenv("PROFIT_AMOUNT_THRESHOLD", 1000))
PROFIT_RATIO_THRESHOLD = float(os.getenv("PROFIT_RATIO_THRESHOLD", 5))

# 分档模式：倍数 >= 高档为 high，否则 >= 中档为 medium
# 不校验 高档 > 中档，按用户输入原样使用
HIGH_THRESHOLD = float(os.getenv("HIGH_THRESHOLD", 10))
MEDIUM_THRESHOLD = float(os.getenv("MEDIUM_THRESHOLD", 5))

FILTER_MODES = ("dual", "tiered")
FILTER_MODE = os.getenv("FILTER_MODE", "dual").strip().lower()
if FILTER_MODE not in FILTER_MODES:
    print(f"⚠️ [配置警告] FILTER_MODE 取值错误 ({FILTER_MODE})，重置为 dual")
    FILTER_MODE = "dual"

# --- 输入表格 ---
# 位置列：钱包, 总利润, 总盈亏(倍数), 买入次数, 卖出次数, 买入金额, 卖出金额
MIN_ROW_FIELDS = 7
# 文本文件依次尝试的编码 (gb18030 兼容国内导出的 GBK 表格)
TEXT_ENCODINGS = ("utf-8-sig", "gb18030")

# --- 目录 ---
RESULTS_DIR = os.getenv("RESULTS_DIR", "results")
LOG_DIR = os.getenv("LOG_DIR", "log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
