import pytest
from PIL import Image, ImageFont

from copyright_watermark.core.compositor import load_font


@pytest.fixture(scope="session")
def font_file(tmp_path_factory):
    # Pillow 自带的默认 TrueType 字体，写到磁盘后按普通字体文件加载
    default = ImageFont.load_default(size=20)
    data = getattr(default, "font_bytes", None)
    if not data:
        pytest.skip("FreeType default font not available")
    path = tmp_path_factory.mktemp("fonts") / "default.ttf"
    path.write_bytes(data)
    return path


@pytest.fixture
def font(font_file):
    return load_font(font_file, 24)


@pytest.fixture
def config_file(tmp_path, font_file):
    def _write(body="", name="config.toml"):
        path = tmp_path / name
        path.write_text(f'font_path = "{font_file.as_posix()}"\n{body}', encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_image():
    def _make(path, size=(200, 100), color=(10, 20, 30), mode="RGB"):
        Image.new(mode, size, color).save(path)
        return path
    return _make
