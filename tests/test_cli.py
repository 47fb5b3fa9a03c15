"""Tests for the zplgfa command line tool."""

from pathlib import Path

import pytest
from PIL import Image

from zplgfa.cli.convert import main


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    """8x2 PNG with a black first row and a white second row."""
    image = Image.new("RGB", (8, 2), "white")
    for x in range(8):
        image.putpixel((x, 0), (0, 0, 0))
    path = tmp_path / "logo.png"
    image.save(path)
    return path


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path):
    """Keep the CLI away from any real config or .env in the working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ZPLGFA_DEBUG", raising=False)
    monkeypatch.setenv("ZPLGFA_CONFIG_FILE", str(tmp_path / "missing.yaml"))


class TestConvertCLI:
    def test_writes_label_to_file(self, image_path: Path, tmp_path: Path):
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-o", str(output), "-t", "ascii"]) == 0
        assert output.read_bytes() == b"^XA,^FS\n^FO0,0\n^GFA,6,2,1,\nFF\n00\n^FS,^XZ\n"

    def test_default_type_is_compressed(self, image_path: Path, tmp_path: Path):
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-o", str(output), "--field-only"]) == 0
        assert output.read_bytes() == b"^GFA,2,2,1,\n!,"

    def test_writes_to_stdout(self, image_path: Path, capsysbinary):
        assert main([str(image_path), "-t", "binary", "--field-only"]) == 0
        assert capsysbinary.readouterr().out == b"^GFB,2,2,1,\n\xff\x00"

    def test_edits(self, image_path: Path, tmp_path: Path):
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-o", str(output), "-t", "ascii", "--field-only", "-e", "invert,flip"]) == 0
        assert output.read_bytes() == b"^GFA,6,2,1,\nFF\n00\n"

    def test_config_file_defaults(self, image_path: Path, tmp_path: Path):
        config_path = tmp_path / "zplgfa.yaml"
        config_path.write_text("graphic_type: binary\nlabel: false\n")
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-o", str(output), "-c", str(config_path)]) == 0
        assert output.read_bytes().startswith(b"^GFB,")

    def test_flags_override_config_file(self, image_path: Path, tmp_path: Path):
        config_path = tmp_path / "zplgfa.yaml"
        config_path.write_text("graphic_type: binary\nlabel: false\n")
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-o", str(output), "-c", str(config_path), "-t", "ascii"]) == 0
        assert output.read_bytes().startswith(b"^GFA,")

    def test_missing_image(self, tmp_path: Path, capsys):
        assert main([str(tmp_path / "nope.png")]) == 1
        assert "Image file not found" in capsys.readouterr().err

    def test_not_an_image(self, tmp_path: Path, capsys):
        path = tmp_path / "notes.png"
        path.write_text("not an image")

        assert main([str(path)]) == 1
        assert "Error reading image" in capsys.readouterr().err

    def test_unknown_graphic_type(self, image_path: Path, capsys):
        assert main([str(image_path), "-t", "z64"]) == 1
        assert "Unknown graphic type" in capsys.readouterr().err

    def test_unknown_edit(self, image_path: Path, capsys):
        assert main([str(image_path), "-e", "sepia"]) == 1
        assert "Unknown image edit" in capsys.readouterr().err

    def test_invalid_config_file(self, image_path: Path, tmp_path: Path, capsys):
        config_path = tmp_path / "zplgfa.yaml"
        config_path.write_text("scale: [1, 2\n")

        assert main([str(image_path), "-c", str(config_path)]) == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_scale_enlarges_image(self, tmp_path: Path):
        path = tmp_path / "block.png"
        Image.new("RGB", (16, 8), "black").save(path)
        output = tmp_path / "block.zpl"

        assert main([str(path), "-o", str(output), "-s", "2", "-t", "ascii", "--field-only"]) == 0
        assert output.read_bytes() == b"^GFA,144,64,4,\n" + b"FFFFFFFF\n" * 16

    def test_invalid_settings(self, image_path: Path, monkeypatch, capsys):
        monkeypatch.setenv("ZPLGFA_DEBUG", "sometimes")

        assert main([str(image_path)]) == 1
        assert "Error loading settings" in capsys.readouterr().err
