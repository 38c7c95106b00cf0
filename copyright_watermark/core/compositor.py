# -*- coding: utf-8 -*-
"""文字合成器：测量文字并将其按 source-over 规则混合到图像上。

测量与绘制使用同一个字体对象与同一套布局规则，
保证定位计算出的包围盒与实际墨迹完全一致。
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageChops, ImageDraw, ImageFont

from .errors import FontLoadError

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@dataclass(frozen=True)
class TextMetrics:
    """文字墨迹包围盒。

    offset_x / offset_y 为包围盒相对 Pillow 绘制原点的偏移，
    绘制时减去即可让墨迹左上角落在目标坐标上。
    """
    width: int
    height: int
    offset_x: int = 0
    offset_y: int = 0


def load_font(font_path: Union[str, Path], font_size: float) -> ImageFont.FreeTypeFont:
    try:
        font = ImageFont.truetype(str(font_path), font_size)
    except (OSError, ValueError) as e:
        raise FontLoadError(f"Cannot load font {font_path}: {e}") from e
    logger.debug("Loaded font %s at size %s", font_path, font_size)
    return font


def measure(font: Font, text: str) -> TextMetrics:
    left, top, right, bottom = (int(v) for v in font.getbbox(text))
    return TextMetrics(width=right - left, height=bottom - top, offset_x=left, offset_y=top)


def coverage_mask(
    size: Tuple[int, int],
    text: str,
    font: Font,
    origin: Tuple[int, int],
    alpha: int = 255,
    *,
    metrics: Optional[TextMetrics] = None,
) -> Image.Image:
    """生成 8 位覆盖率蒙版，值为 c * alpha。

    origin 为墨迹包围盒左上角，可为负；超出画布的像素由 Pillow 直接裁掉。
    """
    if metrics is None:
        metrics = measure(font, text)
    mask = Image.new("L", size, 0)
    if alpha <= 0:
        return mask
    d = ImageDraw.Draw(mask)
    # 在全黑画布上以 alpha 为墨色绘制，抗锯齿后每个像素即 c * alpha
    d.text((origin[0] - metrics.offset_x, origin[1] - metrics.offset_y), text, font=font, fill=alpha)
    return mask


def composite(
    image: Image.Image,
    text: str,
    font: Font,
    origin: Tuple[int, int],
    color: Tuple[int, int, int, int],
    *,
    metrics: Optional[TextMetrics] = None,
) -> Image.Image:
    """在 image 上绘制文本，返回新的 RGBA 图像，原图不变。

    参数：
    - image: 任意模式的图像（调色板/灰度/RGB 会先转为 RGBA）
    - text: 文本内容
    - font: 已创建好的字体对象
    - origin: 墨迹包围盒左上角 (x, y)
    - color: (r,g,b,a)，a 与字形覆盖率相乘得到有效透明度
    """
    if image.mode != "RGBA":
        img = image.convert("RGBA")
    else:
        img = image.copy()
    if not text:
        return img

    r, g, b, a = color
    mask = coverage_mask(img.size, text, font, origin, a, metrics=metrics)
    # 只混合 RGB；有墨迹覆盖的像素 alpha 置为 255，其余保持原值
    ink = Image.new("RGB", img.size, (r, g, b))
    out = Image.composite(ink, img.convert("RGB"), mask)
    covered = mask.point(lambda v: 255 if v else 0)
    out.putalpha(ImageChops.lighter(img.getchannel("A"), covered))
    return out
