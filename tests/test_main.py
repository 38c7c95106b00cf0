import pytest

from copyright_watermark.main import main


@pytest.mark.parametrize("argv", [[], ["only-one"], ["a", "b", "c"]])
def test_wrong_argument_count(capsys, argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_success(tmp_path, config_file, make_image, capsys):
    src = make_image(tmp_path / "photo.png")
    assert main([str(src), str(config_file('text = "© Ünïcødé"\n'))]) == 0
    assert "Copyright watermark added successfully!" in capsys.readouterr().out
    assert (tmp_path / "watermarked_photo.png").exists()


def test_fatal_error_exit_code(tmp_path, make_image, capsys):
    src = make_image(tmp_path / "photo.png")
    assert main([str(src), str(tmp_path / "missing.toml")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_directory_with_failures_still_succeeds(tmp_path, config_file, make_image, capsys):
    images = tmp_path / "images"
    images.mkdir()
    make_image(images / "ok.png")
    (images / "broken.jpg").write_bytes(b"xx")
    assert main([str(images), str(config_file()), "--workers", "2"]) == 0
    assert (images / "watermarked_ok.png").exists()


def test_logger_follows_module_name():
    import copyright_watermark.main as cli
    assert cli.logger.name == "copyright_watermark.main"
