# -*- coding: utf-8 -*-
"""锚点定位：根据图片尺寸与文字包围盒计算文字左上角坐标。

水平、垂直两个方向独立计算；不做裁剪，文字大于图片时允许负坐标。
"""
from __future__ import annotations
from typing import Tuple

from .config import Anchor, HAlign, VAlign

MARGIN = 10


def _half(n: int) -> int:
    # 向零截断，负数时与 // 的向下取整不同
    return -(-n // 2) if n < 0 else n // 2


def _axis(image_len: int, text_len: int, start: bool, end: bool) -> int:
    if start:
        return MARGIN
    if end:
        return image_len - text_len - MARGIN
    return _half(image_len - text_len)


def resolve(image_width: int, image_height: int, text_width: int, text_height: int, anchor: Anchor) -> Tuple[int, int]:
    x = _axis(image_width, text_width,
              anchor.horizontal is HAlign.LEFT, anchor.horizontal is HAlign.RIGHT)
    y = _axis(image_height, text_height,
              anchor.vertical is VAlign.TOP, anchor.vertical is VAlign.BOTTOM)
    return x, y
