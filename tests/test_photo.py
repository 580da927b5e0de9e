import math

import pytest
from PIL import Image

from greetcards.data.models import CardState
from greetcards.rendering.effects import ColorFilter
from greetcards.rendering.photo import (
    PhotoCompositor,
    compute_source_rect,
    cover_rect,
    filter_parameters,
)


def test_zoom_and_pan_crop_window():
    rect = compute_source_rect((1000, 1000), (500, 600), zoom=2, offset_x=50, offset_y=0)

    assert rect.width == pytest.approx(416.6667, abs=1e-3)
    assert rect.height == pytest.approx(500.0)
    assert rect.x == pytest.approx(241.6667, abs=1e-3)
    assert rect.y == pytest.approx(250.0)


def test_cover_fit_of_wide_image_keeps_full_height():
    rect = cover_rect((2000, 1000), (500, 500))

    assert (rect.x, rect.y, rect.width, rect.height) == (500.0, 0.0, 1000.0, 1000.0)


def test_cover_fit_of_tall_image_keeps_full_width():
    rect = cover_rect((600, 1200), (600, 400))

    assert rect.width == pytest.approx(600.0)
    assert rect.height == pytest.approx(400.0)
    assert rect.y == pytest.approx(400.0)


@pytest.mark.parametrize("offset_x,expected_x", [(10_000, 0.0), (-10_000, 500.0)])
def test_pan_is_kept_inside_the_image(offset_x, expected_x):
    rect = compute_source_rect((1000, 1000), (500, 500), zoom=2, offset_x=offset_x)

    assert rect.x == pytest.approx(expected_x)
    assert rect.width == pytest.approx(500.0)


@pytest.mark.parametrize("zoom", [0, -3, 0.01, 0.5, float("nan"), float("inf")])
def test_out_of_range_zoom_keeps_the_cover_crop(zoom):
    rect = compute_source_rect((800, 600), (504, 500), zoom=zoom, offset_x=30, offset_y=-20)

    assert rect.width / rect.height == pytest.approx(504 / 500)
    assert rect.height == pytest.approx(600.0)
    assert all(math.isfinite(v) for v in (rect.x, rect.y, rect.width, rect.height))
    assert 0 <= rect.x <= 800 - rect.width
    assert 0 <= rect.y <= 600 - rect.height


def test_non_finite_pan_is_ignored():
    rect = compute_source_rect((1000, 1000), (500, 500), zoom=2, offset_x=float("nan"))

    assert rect.x == pytest.approx(250.0)


def test_filter_parameters_map_brightness_slider_to_percent():
    assert filter_parameters(CardState(brightness=50)) == (200, 100, 100)
    assert filter_parameters(CardState(brightness=-50, contrast=80, saturation=0)) == (0, 80, 0)


def test_render_photo_is_exactly_the_area_size(photo):
    area = PhotoCompositor().render_photo(photo, (504, 500), CardState(zoom=1.7, offset_x=40))

    assert area.size == (504, 500)
    assert area.mode == "RGBA"


def test_rotation_leaves_corners_transparent():
    solid = Image.new("RGB", (300, 300), (255, 0, 0))

    area = PhotoCompositor().render_photo(solid, (200, 200), CardState(rotation=45))

    assert area.getpixel((0, 0))[3] == 0
    assert area.getpixel((100, 100)) == (255, 0, 0, 255)


def test_unadjusted_photo_keeps_its_colors():
    solid = Image.new("RGB", (300, 200), (12, 34, 56))

    area = PhotoCompositor().render_photo(solid, (150, 100), CardState())

    assert area.getpixel((75, 50)) == (12, 34, 56, 255)


def test_zero_brightness_is_black_and_keeps_alpha():
    img = Image.new("RGBA", (4, 4), (120, 200, 40, 90))

    out = ColorFilter(brightness=0).apply(img)

    assert out.getpixel((1, 1)) == (0, 0, 0, 90)


def test_zero_saturation_is_gray():
    img = Image.new("RGBA", (4, 4), (200, 40, 40, 255))

    r, g, b, _ = ColorFilter(saturate=0).apply(img).getpixel((0, 0))

    assert abs(r - g) <= 1 and abs(g - b) <= 1


def test_zero_contrast_is_mid_gray():
    img = Image.new("RGBA", (4, 4), (10, 250, 90, 255))

    assert ColorFilter(contrast=0).apply(img).getpixel((2, 2)) == (128, 128, 128, 255)


def test_double_brightness_clamps_to_white():
    img = Image.new("RGBA", (2, 2), (200, 100, 0, 255))

    assert ColorFilter(brightness=200).apply(img).getpixel((0, 0)) == (255, 200, 0, 255)
