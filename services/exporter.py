#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@File       : services/exporter.py
@Description: 结果导出 (剪贴板 / txt 文件)
              空文本一律拒绝导出，提示用户而不是生成空文件
"""
import os
import re
from typing import Optional

import pyperclip

from config.settings import OUTPUT_FILE_SUFFIX, RESULTS_DIR
from core.models import Artifact
from utils.logger import logger

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def output_filename(token_name: str) -> str:
    """导出文件名: {代币名称}_盈利分析结果.txt (去掉文件系统不允许的字符)"""
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', token_name)}{OUTPUT_FILE_SUFFIX}"


class ResultExporter:
    """
    结果导出器：负责把格式化好的文本送到剪贴板或写入文件
    """

    @staticmethod
    def copy_to_clipboard(artifact: Artifact) -> bool:
        """
        复制到剪贴板

        Returns:
            是否复制成功 (没有数据或剪贴板不可用时返回 False)
        """
        if artifact.is_empty:
            logger.warning("⚠️ 没有可复制的数据")
            return False

        try:
            pyperclip.copy(artifact.text)
        except pyperclip.PyperclipException as e:
            logger.error(f"❌ 复制失败: {e}")
            return False

        logger.info(f"📋 已复制到剪贴板 ({artifact.result_count} 个钱包)")
        return True

    @staticmethod
    def export_file(artifact: Artifact, output_dir: str = RESULTS_DIR) -> Optional[str]:
        """
        保存为 UTF-8 文本文件

        Args:
            artifact: 计算产物
            output_dir: 输出目录 (不存在则创建)

        Returns:
            输出文件路径；没有数据或写入失败返回 None
        """
        if artifact.is_empty:
            logger.warning("⚠️ 没有可下载的数据")
            return None

        output_file = os.path.join(output_dir, output_filename(artifact.token_name))
        try:
            os.makedirs(output_dir, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(artifact.text)
        except OSError as e:
            logger.error(f"❌ 文件保存失败: {e}")
            return None

        logger.info(f"✅ 文件已保存: {os.path.abspath(output_file)} ({artifact.result_count} 个钱包)")
        return output_file
