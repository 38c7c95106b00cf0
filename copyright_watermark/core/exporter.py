# -*- coding: utf-8 -*-
"""批量导出水印图片。

- 单文件流水线：解码 → 测量 → 定位 → 合成 → 编码写出
- 命名规则：<目录>/watermarked_<原文件名>，已存在则覆盖，原图不动
- 输出格式：按扩展名选择编码器；JPEG 先转为 RGB
- 批处理：单个文件失败只记录，不影响其它文件；可选线程池并行
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from PIL import Image

from .compositor import Font, TextMetrics, composite, load_font, measure
from .config import WatermarkConfig, load_config
from .errors import FileProcessingError, InvalidInputPathError, WriteError
from .image_loader import collect, decode_image, is_image_file
from .position import resolve

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "watermarked_"

# 不支持 alpha 通道的编码器
_FLATTEN_FORMATS = {"JPEG"}


@dataclass
class BatchResult:
    written: List[Path] = field(default_factory=list)
    failures: List[FileProcessingError] = field(default_factory=list)

    @property
    def ok(self) -> int:
        return len(self.written)

    @property
    def fail(self) -> int:
        return len(self.failures)


def output_path_for(path: Union[str, Path]) -> Path:
    path = Path(path)
    return path.with_name(f"{OUTPUT_PREFIX}{path.name}")


def save_image(img: Image.Image, target: Path) -> None:
    fmt = Image.registered_extensions().get(target.suffix.lower())
    try:
        if fmt in _FLATTEN_FORMATS:
            img = img.convert('RGB')
        img.save(target, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise WriteError(target, e) from e


def watermark_file(
    path: Union[str, Path],
    config: WatermarkConfig,
    font: Font,
    metrics: Optional[TextMetrics] = None,
) -> Path:
    """处理单张图片，返回输出路径。"""
    path = Path(path)
    base = decode_image(path)
    if metrics is None:
        metrics = measure(font, config.text)
    x, y = resolve(base.width, base.height, metrics.width, metrics.height, config.anchor)
    out = composite(base, config.text, font, (x, y), config.color.rgba, metrics=metrics)
    target = output_path_for(path)
    save_image(out, target)
    logger.info("Watermarked image saved to: %s", target)
    return target


def export_batch(
    image_paths: Iterable[Union[str, Path]],
    config: WatermarkConfig,
    font: Font,
    *,
    workers: int = 1,
) -> BatchResult:
    """导出所有图片，结果按输入顺序汇总。"""
    paths = [Path(p) for p in image_paths]
    # 配置在整个批次内不变，只需测量一次
    metrics = measure(font, config.text)

    def _run(p: Path) -> Union[Path, FileProcessingError]:
        try:
            return watermark_file(p, config, font, metrics)
        except FileProcessingError as e:
            logger.error("Error processing %s: %s", p, e.cause if e.cause is not None else e)
            return e

    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(_run, paths))
    else:
        outcomes = [_run(p) for p in paths]

    result = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, FileProcessingError):
            result.failures.append(outcome)
        else:
            result.written.append(outcome)
    return result


def process_images(
    input_path: Union[str, Path],
    config_path: Union[str, Path],
    *,
    workers: int = 1,
) -> BatchResult:
    """处理目录或单个文件。

    配置与字体错误在处理任何文件之前抛出；
    单文件模式下解码/写出错误直接向上传播。
    """
    config = load_config(config_path)
    font = load_font(config.font_path, config.font_size)

    input_path = Path(input_path)
    if input_path.is_dir():
        return export_batch(collect(input_path), config, font, workers=workers)
    if is_image_file(input_path):
        return BatchResult(written=[watermark_file(input_path, config, font)])
    raise InvalidInputPathError(f"Invalid input path: {input_path}")
