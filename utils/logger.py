#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : logger.py
@Description: 日志工具模块
              - 按日期写入 log/YYYY-MM-DD.log，跨天自动切换
              - 同时输出到控制台
              - LOG_TO_FILE=false 时只输出到控制台 (测试/一次性脚本)
"""
import logging
import os
from datetime import date, datetime
from logging.handlers import BaseRotatingHandler

from config.settings import LOG_DIR, LOG_LEVEL, LOG_TO_FILE


class DailyRotatingFileHandler(BaseRotatingHandler):
    """
    按日期轮转的文件处理器

    日志文件名由当天日期决定，写入前检查日期，跨天则关闭旧文件、打开新文件。
    """

    def __init__(self, log_dir: str, encoding: str = 'utf-8'):
        """
        Args:
            log_dir: 日志目录路径 (不存在则创建)
            encoding: 文件编码，默认为 utf-8
        """
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

        self.current_date = date.today()
        # BaseRotatingHandler 需要 baseFilename，delay=True 让文件在首次写入时才打开
        super().__init__(self._filename_for(self.current_date), 'a', encoding=encoding, delay=True)

    def _filename_for(self, day: date) -> str:
        return os.path.abspath(os.path.join(self.log_dir, f"{day.strftime('%Y-%m-%d')}.log"))

    def shouldRollover(self, record) -> bool:
        return date.today() != self.current_date

    def doRollover(self):
        """切换到新日期的日志文件"""
        if self.stream:
            self.stream.close()
            self.stream = None

        self.current_date = date.today()
        self.baseFilename = self._filename_for(self.current_date)
        self.stream = self._open()


def setup_logger(name: str = "WalletProfitFilter") -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        配置好的日志记录器对象
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # 避免重复添加处理器
    if not logger.handlers:
        formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        )

        if LOG_TO_FILE:
            fh = DailyRotatingFileHandler(LOG_DIR, encoding='utf-8')
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    return logger


def today_log_file() -> str:
    """当天日志文件路径 (CLI 结束时提示用户)"""
    return os.path.join(LOG_DIR, f"{datetime.now().strftime('%Y-%m-%d')}.log")


# 全局单例 logger
logger = setup_logger()
