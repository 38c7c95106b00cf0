import json

import pytest

from copyright_watermark.core.config import (
    DEFAULT_FONT_PATH, Anchor, Color, WatermarkConfig, load_config,
)
from copyright_watermark.core.errors import ConfigParseError


def test_defaults():
    cfg = WatermarkConfig()
    assert cfg.text == "© Copyright"
    assert cfg.font_path == DEFAULT_FONT_PATH
    assert cfg.font_size == 20.0
    assert cfg.anchor is Anchor.BOTTOM_RIGHT
    assert cfg.color.rgba == (255, 255, 255, 128)


def test_empty_document_uses_defaults(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == WatermarkConfig()


def test_toml_document(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text(
        'text = "© Ünïcødé 2024"\n'
        'font_path = "/fonts/x.ttf"\n'
        'font_size = 32\n'
        'position = "top_center"\n'
        '[color]\n'
        'r = 0\n'
        'a = 255\n',
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.text == "© Ünïcødé 2024"
    assert str(cfg.font_path) == "/fonts/x.ttf"
    assert cfg.font_size == 32.0
    assert isinstance(cfg.font_size, float)
    assert cfg.anchor is Anchor.TOP_CENTER
    # 未给出的分量各自取默认值
    assert cfg.color == Color(r=0, g=255, b=255, a=255)


def test_json_document(tmp_path):
    path = tmp_path / "c.json"
    path.write_text(json.dumps({"position": "middle_left", "color": {"b": 10}, "extra": 1}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.anchor is Anchor.MIDDLE_LEFT
    assert cfg.color.rgba == (255, 255, 10, 128)


@pytest.mark.parametrize("body", [
    'text = "unterminated\n',
    'position = "upper_left"\n',
    'font_size = 0\n',
    'font_size = -3.5\n',
    'font_size = "big"\n',
    'text = ""\n',
    'color = "red"\n',
    '[color]\nr = 256\n',
    '[color]\na = -1\n',
    '[color]\ng = 1.5\n',
])
def test_invalid_documents(tmp_path, body):
    path = tmp_path / "c.toml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigParseError):
        load_config(tmp_path / "nope.toml")


def test_json_must_be_object(tmp_path):
    path = tmp_path / "c.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)


def test_config_is_frozen():
    cfg = WatermarkConfig()
    with pytest.raises(AttributeError):
        cfg.text = "other"
