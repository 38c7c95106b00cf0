# -*- coding: utf-8 -*-
"""水印配置模型。

- 支持 TOML（默认）与 JSON（.json 后缀）两种格式
- 每个字段独立取默认值；未知字段忽略
- 构造时即校验，非法值抛出 ConfigParseError
- 配置对象不可变，整个批次共享一份
"""
from __future__ import annotations
import json
import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

from .errors import ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "© Copyright"
DEFAULT_FONT_PATH = Path("/path/to/default/font.ttf")
DEFAULT_FONT_SIZE = 20.0

_KNOWN_KEYS = {"text", "font_path", "font_size", "position", "color"}


class HAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Anchor(Enum):
    """九宫格锚点，取值即配置文件中的 position 字段。"""
    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    MIDDLE_CENTER = "middle_center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def vertical(self) -> VAlign:
        return VAlign(self.value.split("_")[0])

    @property
    def horizontal(self) -> HAlign:
        return HAlign(self.value.split("_")[1])

    @classmethod
    def parse(cls, token: str) -> "Anchor":
        try:
            return cls(token)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ConfigParseError(f"Unknown position {token!r}, expected one of: {choices}") from None


def _byte(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ConfigParseError(f"Color component {name!r} must be an integer 0-255, got {value!r}")
    return value


@dataclass(frozen=True)
class Color:
    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 128

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            _byte(name, getattr(self, name))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a


@dataclass(frozen=True)
class WatermarkConfig:
    text: str = DEFAULT_TEXT
    font_path: Path = DEFAULT_FONT_PATH
    font_size: float = DEFAULT_FONT_SIZE
    anchor: Anchor = Anchor.BOTTOM_RIGHT
    color: Color = field(default_factory=Color)

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text:
            raise ConfigParseError("'text' must be a non-empty string")
        if isinstance(self.font_size, bool) or not isinstance(self.font_size, (int, float)):
            raise ConfigParseError(f"'font_size' must be a number, got {self.font_size!r}")
        if not self.font_size > 0:
            raise ConfigParseError(f"'font_size' must be positive, got {self.font_size!r}")
        if not isinstance(self.anchor, Anchor):
            raise ConfigParseError(f"'position' must be an Anchor, got {self.anchor!r}")
        # frozen dataclass：只能通过 object.__setattr__ 规范化类型
        object.__setattr__(self, "font_path", Path(self.font_path))
        object.__setattr__(self, "font_size", float(self.font_size))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WatermarkConfig":
        """由已解析的键值文档构造配置，缺失字段取默认值。"""
        if not isinstance(data, Mapping):
            raise ConfigParseError("Configuration document must be a table/object")
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))

        kwargs: dict = {}
        if "text" in data:
            kwargs["text"] = data["text"]
        if "font_path" in data:
            if not isinstance(data["font_path"], str):
                raise ConfigParseError("'font_path' must be a string")
            kwargs["font_path"] = Path(data["font_path"])
        if "font_size" in data:
            kwargs["font_size"] = data["font_size"]
        if "position" in data:
            if not isinstance(data["position"], str):
                raise ConfigParseError("'position' must be a string")
            kwargs["anchor"] = Anchor.parse(data["position"])
        if "color" in data:
            color = data["color"]
            if not isinstance(color, Mapping):
                raise ConfigParseError("'color' must be a table with r, g, b, a")
            kwargs["color"] = Color(**{k: color[k] for k in ("r", "g", "b", "a") if k in color})
        return cls(**kwargs)


def load_config(path: Union[str, Path]) -> WatermarkConfig:
    """读取并解析配置文件。"""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = tomllib.loads(raw)
    except ValueError as e:
        # tomllib.TOMLDecodeError 与 json.JSONDecodeError 均为 ValueError 子类
        raise ConfigParseError(f"Malformed config file {path}: {e}") from e

    config = WatermarkConfig.from_mapping(data)
    logger.debug("Loaded config from %s: %s", path, config)
    return config
