"""Tests for the ``python -m qrwriter`` command line."""

from qrwriter.__main__ import main


def test_main_when_svg_output_then_file_written(tmp_path):
    path = tmp_path / "code.svg"
    assert main(["hello", str(path), "--size", "210", "--quiet-zone", "4"]) == 0
    assert path.read_bytes().startswith(b"<?xml")


def test_main_when_format_given_then_overrides_extension(tmp_path):
    path = tmp_path / "code.out"
    assert main(["hello", str(path), "--format", "binary"]) == 0
    assert len(path.read_text().splitlines()) == 21


def test_main_when_logo_missing_then_error_exit(tmp_path, caplog):
    path = tmp_path / "code.png"
    assert main(["hello", str(path), "--logo", str(tmp_path / "missing.png")]) == 1
    assert "invalid logo path" in caplog.text
    assert not path.exists()


def test_main_when_unknown_extension_then_error_exit(tmp_path):
    assert main(["hello", str(tmp_path / "code.bmp")]) == 1
