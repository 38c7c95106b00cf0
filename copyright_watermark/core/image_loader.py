# -*- coding: utf-8 -*-
"""图片收集与解码。

职责：
- 从文件/文件夹收集待处理图片路径（按扩展名过滤，仅扫描一层）
- 按内容识别格式并解码为 Pillow 图像
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Union

from PIL import Image

from .errors import DecodeError, InvalidInputPathError

logger = logging.getLogger(__name__)

SUPPORTED_EXT = {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp'}


def is_image_file(path: Union[str, Path]) -> bool:
    ext = os.path.splitext(str(path))[1].lower()
    return os.path.isfile(path) and ext in SUPPORTED_EXT


def collect(input_path: Union[str, Path]) -> List[Path]:
    """目录返回其下一层的图片文件（按文件名排序）；图片文件返回自身。"""
    p = Path(input_path)
    if p.is_dir():
        results = [child for child in sorted(p.iterdir()) if is_image_file(child)]
        logger.debug("Found %d image(s) in %s", len(results), p)
        return results
    if is_image_file(p):
        return [p]
    raise InvalidInputPathError(f"Invalid input path: {p} is neither a directory nor a supported image file")


def decode_image(path: Union[str, Path]) -> Image.Image:
    # 格式由文件内容识别，与扩展名无关
    try:
        with Image.open(path) as img:
            img.load()
            return img.copy()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(Path(path), e) from e
