import pytest

from greetcards.resources.colors import ColorParser
from greetcards.utils.exceptions import ColorParseError


@pytest.mark.parametrize(
    "spec,expected",
    [
        ("#fff", (255, 255, 255, 255)),
        ("#0A6BC0", (10, 107, 192, 255)),
        ("#D400D4", (212, 0, 212, 255)),
        ("#00000080", (0, 0, 0, 128)),
        ("white", (255, 255, 255, 255)),
        ("rgb(3, 32, 83)", (3, 32, 83, 255)),
        ("rgba(0, 0, 0, 0.2)", (0, 0, 0, 51)),
        ("rgba(3,32,83,0.45)", (3, 32, 83, 115)),
    ],
)
def test_parse_css_colors(spec, expected):
    assert ColorParser.parse(spec) == expected


def test_tuples_pass_through_with_alpha():
    assert ColorParser.parse((1, 2, 3)) == (1, 2, 3, 255)
    assert ColorParser.parse((1, 2, 3, 4)) == (1, 2, 3, 4)


@pytest.mark.parametrize("spec", ["#12", "rgba(0, 0, 0, 2)", "rgb(300, 0, 0)", "not-a-color"])
def test_invalid_color_raises_when_strict(spec):
    with pytest.raises(ColorParseError) as exc_info:
        ColorParser.parse(spec)

    assert exc_info.value.color_spec == spec


def test_invalid_color_falls_back_to_black_when_lenient():
    assert ColorParser.parse("not-a-color", strict=False) == (0, 0, 0, 255)


def test_to_hex():
    assert ColorParser.to_hex((212, 0, 212, 255)) == "#D400D4"
