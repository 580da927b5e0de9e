"""Color parsing and conversion utilities.

This module turns the CSS-style color strings used by the card templates
("#0A6BC0", "#fff", "rgba(3, 32, 83, 0.45)", "white") into RGBA tuples
suitable for PIL.
"""

import re
from functools import lru_cache
from typing import Final

from greetcards.utils.exceptions import ColorParseError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

RGBA = tuple[int, int, int, int]


class ColorParser:
    """Parses CSS-style color specifications into RGBA tuples.

    Supported formats:
        - Color names: "white", "black", "transparent", ...
        - Hex codes: "#RGB", "#RRGGBB", "#RRGGBBAA" (with or without #)
        - Functional: "rgb(255, 0, 0)", "rgba(0, 0, 0, 0.7)"

    Alpha in rgba() is a 0-1 float as in CSS.

    Example:
        >>> ColorParser.parse("#D400D4")
        (212, 0, 212, 255)
        >>> ColorParser.parse("rgba(0, 0, 0, 0.2)")
        (0, 0, 0, 51)
    """

    COLOR_NAMES: Final[dict[str, RGBA]] = {
        "black": (0, 0, 0, 255),
        "white": (255, 255, 255, 255),
        "red": (255, 0, 0, 255),
        "green": (0, 128, 0, 255),
        "blue": (0, 0, 255, 255),
        "gray": (128, 128, 128, 255),
        "grey": (128, 128, 128, 255),
        "magenta": (255, 0, 255, 255),
        "navy": (0, 0, 128, 255),
        "transparent": (0, 0, 0, 0),
    }

    HEX_PATTERN: Final = re.compile(r"^#?([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$")
    FUNC_PATTERN: Final = re.compile(
        r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
    )

    @classmethod
    def parse(cls, color_spec: str | tuple | None, strict: bool = True) -> RGBA:
        """Parse a color specification into an RGBA tuple.

        Args:
            color_spec: Color string, or an RGB(A) tuple passed through
            strict: If True, raise on unrecognized input; otherwise fall back to black

        Returns:
            RGBA tuple

        Raises:
            ColorParseError: If strict and the color cannot be parsed
        """
        if isinstance(color_spec, tuple):
            if len(color_spec) == 3:
                return (*color_spec, 255)
            return tuple(color_spec)

        if color_spec is None:
            return (0, 0, 0, 255)

        result = cls._parse_cached(str(color_spec).lower().strip())

        if result is None:
            if strict:
                raise ColorParseError(
                    "Color not recognized",
                    color_spec=str(color_spec),
                    expected_format="name, #RGB, #RRGGBB, rgb(...) or rgba(...)",
                )
            logger.warning(f"Color '{color_spec}' not recognized. Using black.")
            return (0, 0, 0, 255)

        return result

    @classmethod
    @lru_cache(maxsize=128)
    def _parse_cached(cls, color_str: str) -> RGBA | None:
        return (
            cls.COLOR_NAMES.get(color_str)
            or cls._parse_hex(color_str)
            or cls._parse_functional(color_str)
        )

    @classmethod
    def _parse_hex(cls, color_str: str) -> RGBA | None:
        """Parse a 3, 6 or 8 digit hex code."""
        match = cls.HEX_PATTERN.match(color_str)
        if not match:
            return None

        hex_value = match.group(1)
        if len(hex_value) == 3:
            hex_value = "".join(ch * 2 for ch in hex_value)
        if len(hex_value) == 6:
            hex_value += "ff"

        return tuple(int(hex_value[i:i + 2], 16) for i in range(0, 8, 2))

    @classmethod
    def _parse_functional(cls, color_str: str) -> RGBA | None:
        """Parse rgb()/rgba() notation with a 0-1 alpha."""
        match = cls.FUNC_PATTERN.match(color_str)
        if not match:
            return None

        r, g, b = (int(match.group(i)) for i in (1, 2, 3))
        if not all(0 <= val <= 255 for val in (r, g, b)):
            return None

        alpha = 1.0 if match.group(4) is None else float(match.group(4))
        if not 0.0 <= alpha <= 1.0:
            return None

        return (r, g, b, round(alpha * 255))

    @classmethod
    def to_hex(cls, color: tuple) -> str:
        """Convert an RGB(A) tuple to a "#RRGGBB" string."""
        return f"#{color[0]:02X}{color[1]:02X}{color[2]:02X}"

    @classmethod
    def with_alpha(cls, color: tuple, alpha: int) -> RGBA:
        """Replace the alpha channel of a color."""
        return (*color[:3], alpha)
