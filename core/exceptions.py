#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : core/exceptions.py
@Description: 异常定义
              行级的脏数据在解析时就地用 0 兜底，不会抛出；只有整份文件读不了/解析不了才抛。
"""


class WalletFilterError(Exception):
    """所有可上报给用户的错误的基类"""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class ReadError(WalletFilterError):
    """文件本身读取失败 (I/O 错误)"""


class ParseError(WalletFilterError):
    """文件内容无法识别为支持的表格格式"""
