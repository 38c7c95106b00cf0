# -*- coding: utf-8 -*-
"""程序入口模块。"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from copyright_watermark.core.errors import WatermarkError
from copyright_watermark.core.exporter import process_images

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    # 参数个数错误时以 1 退出，而不是 argparse 默认的 2
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="copyright-watermark",
        description="Stamp a copyright notice onto an image or every image in a directory.",
    )
    parser.add_argument("input", help="Path to the image file or directory of images.")
    parser.add_argument("config", help="Path to the watermark config file (TOML, or JSON with a .json suffix).")
    parser.add_argument("--workers", type=int, default=1, help="Number of images processed in parallel.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s - %(message)s",
    )

    try:
        result = process_images(args.input, args.config, workers=max(1, args.workers))
    except WatermarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.fail:
        logger.warning("%d of %d image(s) could not be watermarked", result.fail, result.ok + result.fail)
    print("Copyright watermark added successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
