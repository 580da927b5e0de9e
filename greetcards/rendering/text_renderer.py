"""Text rendering utilities.

This module provides word wrapping, auto-fit font sizing and styled text
drawing (solid or gradient fill, optional letter spacing) for the card
compositor.
"""

from PIL import Image, ImageChops, ImageDraw

from greetcards.config.models import FontFace, TextStyle
from greetcards.rendering.effects import linear_gradient
from greetcards.resources.colors import ColorParser
from greetcards.resources.fonts import Font, FontLoader
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

# Horizontal part of a Pillow anchor mapped to the fraction of width left of x
_ANCHOR_SHIFT = {"l": 0.0, "m": 0.5, "r": 1.0}


class TextRenderer:
    """Draws and measures the text of a card.

    Widths are always measured with the exact font that will draw the text,
    so wrapping and fitting depend on family, weight and size.

    Attributes:
        font_loader: Loader used by fit_font to try candidate sizes

    Example:
        >>> renderer = TextRenderer(font_loader)
        >>> end_x = renderer.draw_text(canvas, (48, 380), "5", font, style)
    """

    def __init__(self, font_loader: FontLoader | None = None):
        """Initialize text renderer.

        Args:
            font_loader: FontLoader instance (creates default if None)
        """
        self.font_loader = font_loader or FontLoader()

    @staticmethod
    def format_text(template: str, fields: dict[str, str]) -> str:
        """Fill a layout string such as "DOJ : {doj}" from the state fields."""
        return template.format_map(fields)

    @staticmethod
    def measure_text(text: str, font: Font, letter_spacing: float = 0) -> float:
        """Advance width of a single line of text.

        Letter spacing is added after every character, the last included.

        Args:
            text: Text to measure
            font: Font to measure with
            letter_spacing: Extra advance per character in pixels

        Returns:
            Width in pixels
        """
        if not letter_spacing:
            return font.getlength(text)

        return sum(font.getlength(char) + letter_spacing for char in text)

    @staticmethod
    def anchor_left(x: float, width: float, anchor: str) -> float:
        """Left edge of a line of the given width drawn at x with this anchor."""
        return x - width * _ANCHOR_SHIFT.get(anchor[0], 0.0)

    def split_lines(self, text: str, font: Font, max_width: float) -> list[str]:
        """Break text into lines no wider than max_width.

        Words are separated by single spaces. A word is added to the current
        line while the line, the word and a trailing space still fit; a
        line is only broken when it already holds a word, so a single word
        wider than max_width gets a line of its own. The last line is always
        kept, even when empty.

        Args:
            text: Text to wrap
            font: Font used for measuring
            max_width: Maximum width in pixels

        Returns:
            Lines in drawing order (at least one)

        Example:
            >>> renderer.split_lines("", font, 340)
            ['']
        """
        lines = []
        current: list[str] = []

        for word in text.split(" "):
            test_line = " ".join(current + [word]) + " "

            if font.getlength(test_line) > max_width and current:
                lines.append(" ".join(current))
                current = [word]
            else:
                current.append(word)

        lines.append(" ".join(current))
        return lines

    def wrap_text(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        position: tuple[float, float],
        font: Font,
        max_width: float,
        line_height: float,
        fill: tuple,
        anchor: str = "la",
    ) -> list[tuple[str, float]]:
        """Draw word-wrapped text, one line every line_height pixels.

        Args:
            draw: ImageDraw object to draw on
            text: Text to draw
            position: (x, y) of the first line
            font: Font to draw with
            max_width: Maximum line width in pixels
            line_height: Distance between line origins
            fill: Text color
            anchor: Pillow text anchor for every line

        Returns:
            (line, y) of every line drawn
        """
        x, y = position
        drawn = []

        for line in self.split_lines(text, font, max_width):
            draw.text((x, y), line, font=font, fill=fill, anchor=anchor)
            drawn.append((line, y))
            y += line_height

        logger.debug(f"Wrapped text into {len(drawn)} line(s)")
        return drawn

    def fit_font(
        self,
        text: str,
        face: FontFace | None,
        sizes: tuple[int, ...],
        max_width: float,
        letter_spacing: float = 0,
    ) -> tuple[Font, int]:
        """Pick the largest candidate size at which the text fits.

        Candidates are tried in the order given (largest first); the first
        whose measured width is within max_width wins. If none fits, the
        last (smallest) is returned and the text may overflow.

        Args:
            text: Text to fit
            face: Font face
            sizes: Candidate sizes, descending
            max_width: Width the text must fit in
            letter_spacing: Extra advance per character

        Returns:
            (font, size) to draw with
        """
        if not sizes:
            raise ValueError("fit_font needs at least one candidate size")

        for size in sizes:
            font = self.font_loader.load_font(face, size)
            if self.measure_text(text, font, letter_spacing) <= max_width:
                return font, size

        logger.debug(f"'{text}' does not fit in {max_width}px, using smallest size {sizes[-1]}")
        return font, sizes[-1]

    def draw_text(
        self,
        image: Image.Image,
        position: tuple[float, float],
        text: str,
        font: Font,
        style: TextStyle,
    ) -> float:
        """Draw one line of styled text onto an RGBA image.

        Args:
            image: RGBA image to draw on
            position: Anchor point
            text: Text to draw
            font: Font to draw with (style.size is not consulted)
            style: Color, gradient, anchor and letter spacing

        Returns:
            x coordinate where the text ends
        """
        width = self.measure_text(text, font, style.letter_spacing)
        left = self.anchor_left(position[0], width, style.anchor)

        if style.gradient is None:
            draw = ImageDraw.Draw(image)
            self._draw_line(draw, position, left, text, font, ColorParser.parse(style.color), style)
            return left + width

        # Gradient text: draw a coverage mask, then fill it with the gradient
        mask = Image.new("L", image.size, 0)
        self._draw_line(ImageDraw.Draw(mask), position, left, text, font, 255, style)

        fill = linear_gradient(image.size, style.gradient)
        fill.putalpha(ImageChops.multiply(fill.getchannel("A"), mask))
        image.alpha_composite(fill)

        return left + width

    def _draw_line(
        self,
        draw: ImageDraw.ImageDraw,
        position: tuple[float, float],
        left: float,
        text: str,
        font: Font,
        fill,
        style: TextStyle,
    ) -> None:
        """Draw a line either in one call or character by character when spaced."""
        if not style.letter_spacing:
            draw.text(position, text, font=font, fill=fill, anchor=style.anchor)
            return

        # Per-character drawing, left anchored, keeping the vertical anchor
        anchor = "l" + style.anchor[1]
        x = left
        for char in text:
            draw.text((x, position[1]), char, font=font, fill=fill, anchor=anchor)
            x += font.getlength(char) + style.letter_spacing
