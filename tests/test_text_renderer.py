from unittest.mock import MagicMock

import pytest
from PIL import Image

from greetcards.config.models import FontFace, GradientSpec, TextStyle
from greetcards.rendering.text_renderer import TextRenderer

FACE = FontFace("missing.ttf", "NoSuchFamily")


@pytest.fixture
def renderer(font_loader):
    return TextRenderer(font_loader)


@pytest.fixture
def font(font_loader):
    return font_loader.load_font(FACE, 26)


def test_empty_quote_draws_one_empty_line(renderer, font):
    draw = MagicMock()

    drawn = renderer.wrap_text(draw, "", (48, 610), font, 340, 36, (112, 112, 112, 255))

    assert drawn == [("", 610)]
    assert draw.text.call_count == 1
    assert draw.text.call_args.args == ((48, 610), "")


def test_text_that_fits_stays_on_one_line(renderer, font):
    draw = MagicMock()

    drawn = renderer.wrap_text(draw, "thank you all", (0, 0), font, 10_000, 36, (0, 0, 0, 255))

    assert drawn == [("thank you all", 0)]


def test_each_overflowing_word_starts_a_new_line(renderer, font):
    draw = MagicMock()

    drawn = renderer.wrap_text(draw, "aa bb cc", (48, 610), font, 1, 36, (0, 0, 0, 255))

    assert drawn == [("aa", 610), ("bb", 646), ("cc", 682)]


def test_split_lines_breaks_before_the_word_that_overflows(renderer, font):
    limit = font.getlength("one two ") + 1

    assert renderer.split_lines("one two three", font, limit) == ["one two", "three"]


def test_fit_font_picks_first_size_that_fits(renderer, font_loader):
    text = "Senior Platform Engineer"
    width_28 = font_loader.load_font(FACE, 28).getlength(text)

    font, size = renderer.fit_font(text, FACE, (36, 32, 28), width_28 + 0.5)

    assert size == 28
    assert font.getlength(text) <= width_28 + 0.5


def test_fit_font_can_pick_a_middle_size(renderer, font_loader):
    text = "Senior Platform Engineer"
    width_32 = font_loader.load_font(FACE, 32).getlength(text)

    font, size = renderer.fit_font(text, FACE, (36, 32, 28), width_32 + 0.5)

    assert size == 32
    assert font.getlength(text) == pytest.approx(width_32)


def test_fit_font_prefers_largest_size(renderer):
    _, size = renderer.fit_font("Ana", FACE, (38, 28), 10_000)

    assert size == 38


def test_fit_font_falls_back_to_smallest_without_truncating(renderer):
    _, size = renderer.fit_font("A very long department name", FACE, (30, 28, 24), 1)

    assert size == 24


def test_letter_spacing_adds_after_every_character(renderer, font):
    plain = sum(font.getlength(ch) for ch in "WWW")

    assert renderer.measure_text("WWW", font, letter_spacing=2) == pytest.approx(plain + 6)


def test_format_text_fills_state_fields():
    assert TextRenderer.format_text("DOJ : {doj}", {"doj": "2020-03-01"}) == "DOJ : 2020-03-01"


def test_right_anchored_text_ends_at_x(renderer, font):
    image = Image.new("RGBA", (400, 100), (0, 0, 0, 0))
    style = TextStyle(FACE, 26, "#707070", "ra")

    end_x = renderer.draw_text(image, (380, 20), "www", font, style)

    assert end_x == pytest.approx(380)


def test_gradient_text_paints_only_inside_the_glyphs(renderer, font):
    image = Image.new("RGBA", (400, 100), (0, 0, 0, 0))
    gradient = GradientSpec((0, 0), (400, 0), ((0.0, "#0A6BC0"), (1.0, "#069EE1")))
    style = TextStyle(FACE, 26, gradient=gradient)

    end_x = renderer.draw_text(image, (10, 10), "Work", font, style)

    assert end_x == pytest.approx(10 + font.getlength("Work"))
    bbox = image.getbbox()
    assert bbox is not None
    assert bbox[0] >= 8 and bbox[2] <= end_x + 3
