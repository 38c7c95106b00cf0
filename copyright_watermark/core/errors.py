# -*- coding: utf-8 -*-
"""异常定义。

- 全局前置条件：ConfigParseError / FontLoadError，整次运行直接中止
- 输入路径：InvalidInputPathError（单文件模式致命，目录模式跳过）
- 单文件错误：DecodeError / WriteError，仅记录，批处理继续
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional


class WatermarkError(Exception):
    """所有水印相关错误的基类。"""


class ConfigParseError(WatermarkError):
    """配置文件无法读取、语法错误或字段非法。"""


class FontLoadError(WatermarkError):
    """字体文件缺失或无法解析。"""


class InvalidInputPathError(WatermarkError):
    """输入路径既不是目录也不是支持的图片文件。"""


class FileProcessingError(WatermarkError):
    """单个文件处理失败，携带出错的路径。"""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{self.describe()} {self.path}{detail}")

    def describe(self) -> str:
        return "Failed to process"


class DecodeError(FileProcessingError):
    def describe(self) -> str:
        return "Cannot decode image"


class WriteError(FileProcessingError):
    def describe(self) -> str:
        return "Cannot write image"
