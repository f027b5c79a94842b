# -*- coding: utf-8 -*-
import os

# 必须在导入项目模块之前设置：测试不写日志文件
os.environ["LOG_TO_FILE"] = "false"

import pandas as pd
import pytest

HEADER = ["钱包地址", "总利润", "总盈亏", "买入次数", "卖出次数", "买入金额", "卖出金额"]

SAMPLE_ROWS = [
    ["0x5b1b2276367dcac82dbd20d5acd2052d703c4444", "5200.5", "12.4", "3", "2", "420", "5620.5"],
    ["0xaaa0000000000000000000000000000000000111", "999", "10", "1", "1", "100", "1099"],
    ["0xbbb0000000000000000000000000000000000222", "1000", "5", "4", "4", "250", "1250"],
    ["0xccc0000000000000000000000000000000000333", "3000", "7.5", "2", "1", "400", "3400"],
    ["0xddd0000000000000000000000000000000000444", "-50", "0.8", "6", "6", "300", "250"],
]


def to_csv_bytes(rows, header=HEADER, encoding="utf-8") -> bytes:
    lines = [",".join(header)] + [",".join(r) for r in rows]
    return ("\n".join(lines) + "\n").encode(encoding)


@pytest.fixture
def sample_csv_bytes():
    return to_csv_bytes(SAMPLE_ROWS)


@pytest.fixture
def sample_csv_file(tmp_path, sample_csv_bytes):
    path = tmp_path / "Top收益.csv"
    path.write_bytes(sample_csv_bytes)
    return path


@pytest.fixture
def sample_xlsx_file(tmp_path):
    """两个工作表，只有第一个应该被读取"""
    path = tmp_path / "Top收益.xlsx"
    first = pd.DataFrame(
        [
            ["0x5b1b2276367dcac82dbd20d5acd2052d703c4444", 5200.5, 12.4, 3, 2, 420, 5620.5],
            ["0xccc0000000000000000000000000000000000333", 3000, 7.5, 2, 1, 400, 3400],
            ["  0xeee0000000000000000000000000000000000555  ", "n/a", 6, 1, 0, 80, 0],
        ],
        columns=HEADER,
    )
    second = pd.DataFrame([["0xfff0000000000000000000000000000000000666", 1, 1, 1, 1, 1, 1]], columns=HEADER)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        first.to_excel(writer, sheet_name="Top收益", index=False)
        second.to_excel(writer, sheet_name="其他", index=False)
    return path
