import io

import pytest
from PIL import Image

from greetcards.config.models import OutputConfig
from greetcards.io import exporter as exporter_module
from greetcards.io.exporter import CardExporter
from greetcards.utils.exceptions import ExportError


@pytest.fixture
def card():
    img = Image.new("RGBA", (1080, 1080), (240, 240, 240, 255))
    img.paste((10, 107, 192, 255), (100, 100, 300, 300))
    return img


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Jane   Doe", "Anniversary_Jane_Doe.png"),
        ("Ana\tMaria  Lima", "Anniversary_Ana_Maria_Lima.png"),
        ("", "Anniversary_.png"),
    ],
)
def test_output_filename_collapses_whitespace(name, expected):
    assert CardExporter.output_filename("Anniversary", name) == expected


def test_png_bytes_are_lossless(card):
    data = CardExporter().to_png_bytes(card)

    decoded = Image.open(io.BytesIO(data))
    assert decoded.format == "PNG"
    assert decoded.size == (1080, 1080)
    assert decoded.convert("RGBA").tobytes() == card.tobytes()


def test_save_writes_only_the_card(tmp_path, card):
    path = CardExporter().save(card, tmp_path / "out", "Birthday_Ana.png")

    assert path == tmp_path / "out" / "Birthday_Ana.png"
    assert [p.name for p in (tmp_path / "out").iterdir()] == ["Birthday_Ana.png"]
    assert Image.open(path).size == (1080, 1080)


def test_failed_save_leaves_no_file(tmp_path, card, monkeypatch):
    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(exporter_module.os, "replace", broken_replace)

    with pytest.raises(ExportError) as exc_info:
        CardExporter().save(card, tmp_path, "Birthday_Ana.png")

    assert "disk full" in str(exc_info.value)
    assert list(tmp_path.iterdir()) == []


def test_skip_existing_keeps_the_old_file(tmp_path, card):
    target = tmp_path / "Birthday_Ana.png"
    target.write_bytes(b"old")

    CardExporter(OutputConfig(skip_existing=True)).save(card, tmp_path, target.name)

    assert target.read_bytes() == b"old"


def test_compress_level_is_validated():
    with pytest.raises(ValueError):
        OutputConfig(compress_level=12)
