import io

import pytest
from PIL import Image

from greetcards.config.models import RenderConfig
from greetcards.config.templates import ANNIVERSARY, BIRTHDAY
from greetcards.resources.assets import AssetLoader, decode_image
from greetcards.utils.exceptions import ImageDecodeError


def test_missing_assets_fall_back_without_raising(tmp_path):
    assets = AssetLoader(RenderConfig(assets_dir=str(tmp_path / "nowhere"))).load(BIRTHDAY)

    assert assets.background is None
    assert assets.logo is None
    assert len(assets.results) == 2 + len(BIRTHDAY.fonts)
    assert all(not result.loaded for result in assets.results)
    assert all(result.error for result in assets.results)


def test_present_background_loads_and_missing_logo_fails(tmp_path):
    Image.new("RGB", (1080, 1080), (0, 71, 171)).save(tmp_path / "background.png")

    assets = AssetLoader(RenderConfig(assets_dir=str(tmp_path))).load(ANNIVERSARY)

    assert assets.background is not None
    assert assets.background.mode == "RGBA"
    results = {result.name: result for result in assets.results}
    assert results["background"].loaded
    assert not results["logo"].loaded
    assert "logo" in [result.name for result in assets.failures]


def test_corrupt_image_is_a_failed_result(tmp_path):
    (tmp_path / "background.png").write_bytes(b"definitely not a png")

    assets = AssetLoader(RenderConfig(assets_dir=str(tmp_path))).load(ANNIVERSARY)

    results = {result.name: result for result in assets.results}
    assert assets.background is None
    assert "Cannot decode image" in results["background"].error


def test_decode_image_applies_exif_orientation():
    img = Image.new("RGB", (40, 20), (200, 0, 0))
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 clockwise on display
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", exif=exif)

    photo = decode_image(buffer.getvalue())

    assert photo.size == (20, 40)
    assert photo.mode == "RGBA"


def test_decode_image_rejects_garbage():
    with pytest.raises(ImageDecodeError) as exc_info:
        decode_image(b"\x00\x01\x02", source="upload")

    assert exc_info.value.source == "upload"
