#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : services/parser.py
@Description: 表格解析 (CSV / Excel -> WalletRecord 列表)
              - 第一行视为表头直接丢弃
              - 列数不足 7 或钱包为空的行静默跳过
              - 数值解析失败一律按 0 处理，单行脏数据不会中断整份文件
"""
import csv
import io
import math
import re
from typing import Any, List, Optional, Sequence

import pandas as pd

from config.settings import MIN_ROW_FIELDS, TEXT_ENCODINGS
from core.exceptions import ParseError, ReadError
from core.models import WalletRecord
from utils.logger import logger

# 文件头魔数
ZIP_MAGIC = b"PK\x03\x04"  # xlsx / xlsm
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"  # 旧版 xls

# 按文件头选择 read_excel 引擎，扩展名不参与判断
EXCEL_ENGINES = (
    (ZIP_MAGIC, "openpyxl"),
    (OLE2_MAGIC, "xlrd"),
)

# 取开头的数字部分，"12.5abc" -> 12.5，"abc" -> 无
_DECIMAL_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PREFIX = re.compile(r"^[+-]?\d+")


def cell_text(value: Any) -> str:
    """单元格转字符串 (空单元格为空串，整数值的浮点数去掉 .0)"""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def parse_decimal(value: Any) -> float:
    """
    宽松的小数解析

    Args:
        value: 单元格原值

    Returns:
        解析出的数值，无法解析 (空、非数字、非有限值) 时返回 0.0
    """
    match = _DECIMAL_PREFIX.match(cell_text(value).lstrip())
    if not match:
        return 0.0
    number = float(match.group(0))
    if not math.isfinite(number):
        return 0.0
    # -0.0 也归为 0
    return number or 0.0


def parse_integer(value: Any) -> int:
    """宽松的整数解析，"3.7" -> 3，无法解析返回 0"""
    match = _INTEGER_PREFIX.match(cell_text(value).lstrip())
    if not match:
        return 0
    return int(match.group(0))


def read_source(path: str) -> bytes:
    """
    读取文件原始字节

    Raises:
        ReadError: 文件不存在或无法读取
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ReadError(f"文件读取失败: {e}", source=path) from e


class RecordParser:
    """
    表格解析器：负责把文件字节转换为有序的 WalletRecord 列表

    支持：
    - 逗号分隔文本 (utf-8 / gb18030)
    - xlsx / xlsm / 旧版 xls (只取第一个工作表)
    """

    def __init__(self, min_fields: int = MIN_ROW_FIELDS):
        self.min_fields = min_fields

    def parse(self, data: bytes, source: str = "") -> List[WalletRecord]:
        """
        解析整份文件

        Args:
            data: 文件原始字节
            source: 文件名 (仅用于日志和错误信息)

        Returns:
            按原始行序排列的钱包记录 (不去重)

        Raises:
            ParseError: 文件无法识别为表格
        """
        rows = self.read_rows(data, source)
        records = self.parse_rows(rows)
        logger.debug(f"📄 {source or '<bytes>'}: 共 {max(len(rows) - 1, 0)} 行数据，有效 {len(records)} 行")
        return records

    def read_rows(self, data: bytes, source: str = "") -> List[List[Any]]:
        """
        把字节读成行列表 (已去掉全空行和每行末尾的空单元格，表头仍在第一行)
        """
        # 只看文件内容，不看扩展名 (.xls 里装的可能是 CSV 文本)
        for magic, engine in EXCEL_ENGINES:
            if data.startswith(magic):
                raw_rows = self._read_spreadsheet(data, source, engine)
                break
        else:
            raw_rows = self._read_delimited(data, source)

        rows = []
        for raw in raw_rows:
            row = self._trim_trailing(raw)
            if row:
                rows.append(row)
        return rows

    def parse_rows(self, rows: Sequence[Sequence[Any]]) -> List[WalletRecord]:
        """跳过表头，逐行转换；不合格的行直接丢弃"""
        records = []
        for line_no, row in enumerate(rows[1:], start=2):
            record = self.parse_row(row)
            if record is None:
                logger.debug(f"⏭️ 跳过第 {line_no} 行: 列数 {len(row)} 或钱包为空")
                continue
            records.append(record)
        return records

    def parse_row(self, row: Sequence[Any]) -> Optional[WalletRecord]:
        """
        单行转换

        Returns:
            WalletRecord；列数不足或钱包为空时返回 None
        """
        if len(row) < self.min_fields:
            return None

        wallet = cell_text(row[0]).strip()
        if not wallet:
            return None

        return WalletRecord(
            wallet=wallet,
            total_profit=parse_decimal(row[1]),
            profit_ratio=parse_decimal(row[2]),
            buy_count=parse_integer(row[3]),
            sell_count=parse_integer(row[4]),
            buy_amount=parse_decimal(row[5]),
            sell_amount=parse_decimal(row[6]),
        )

    @staticmethod
    def _trim_trailing(row: Sequence[Any]) -> List[Any]:
        cells = list(row)
        while cells and cell_text(cells[-1]) == "":
            cells.pop()
        return cells

    @staticmethod
    def _decode(data: bytes, source: str) -> str:
        if b"\x00" in data:
            raise ParseError("文件包含二进制内容，无法作为文本表格解析", source=source)

        for encoding in TEXT_ENCODINGS:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise ParseError("无法识别文件编码", source=source)

    def _read_delimited(self, data: bytes, source: str) -> List[List[str]]:
        # 行长度参差不齐 (末尾空列被省略) 是常态，逐行读取而不是按固定列宽读
        text = self._decode(data, source)
        try:
            return [row for row in csv.reader(io.StringIO(text, newline=""))]
        except csv.Error as e:
            raise ParseError(f"CSV 解析失败: {e}", source=source) from e

    @staticmethod
    def _read_spreadsheet(data: bytes, source: str, engine: str) -> List[List[Any]]:
        try:
            # "N/A"、"NULL" 之类的文本按原样保留，不转成 NaN
            df = pd.read_excel(
                io.BytesIO(data),
                sheet_name=0,
                header=None,
                dtype=object,
                engine=engine,
                keep_default_na=False,
                na_filter=False,
            )
        except Exception as e:
            raise ParseError(f"Excel 解析失败: {e}", source=source) from e

        # 空单元格为空串，全空行由 read_rows 统一去掉
        return df.values.tolist()
