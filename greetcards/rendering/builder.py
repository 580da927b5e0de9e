"""Greeting card builder using the Builder pattern.

This module implements step-by-step composition of a card: background,
logo, headline, quote, the rotated polaroid with the user photo, captions,
decorations and footer, always in that order. What each step draws comes
from the template; the steps themselves are shared by every design.
"""

import math

from PIL import Image, ImageDraw

from greetcards.config.models import Badge, CardTemplate, OutlineSquare, TextBlock
from greetcards.data.models import CardAssets, CardState
from greetcards.rendering.effects import ShadowEffect, linear_gradient
from greetcards.rendering.photo import PhotoCompositor, cover_rect
from greetcards.rendering.text_renderer import TextRenderer
from greetcards.resources.colors import ColorParser
from greetcards.utils.constants import CANVAS_SIZE, POLAROID_LAYER_MARGIN
from greetcards.utils.exceptions import CardRenderError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


def fill_rect(image: Image.Image, box: tuple[float, float, float, float], color: str) -> None:
    """Fill an (x, y, width, height) rectangle, blending translucent colors."""
    x, y, w, h = box
    if w <= 0 or h <= 0:
        return

    rgba = ColorParser.parse(color)
    shape = [(x, y), (x + w - 1, y + h - 1)]

    if rgba[3] == 255:
        ImageDraw.Draw(image).rectangle(shape, fill=rgba)
        return

    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    ImageDraw.Draw(overlay).rectangle(shape, fill=rgba)
    image.alpha_composite(overlay)


def composite_at(image: Image.Image, layer: Image.Image, position: tuple[int, int]) -> None:
    """Alpha-composite a layer at a position that may lie partly off the image."""
    if position[0] >= 0 and position[1] >= 0:
        image.alpha_composite(layer, dest=position)
        return

    placed = Image.new("RGBA", image.size, (0, 0, 0, 0))
    placed.paste(layer, position)
    image.alpha_composite(placed)


class CardBuilder:
    """Builder for composing a greeting card step by step.

    Example:
        >>> builder = CardBuilder(template, state, assets)
        >>> image = (builder
        ...     .create_canvas()
        ...     .draw_background()
        ...     .draw_logo()
        ...     .draw_headline()
        ...     .draw_quote()
        ...     .draw_polaroid()
        ...     .draw_captions()
        ...     .draw_decorations()
        ...     .draw_footer()
        ...     .build())
    """

    def __init__(
        self,
        template: CardTemplate,
        state: CardState,
        assets: CardAssets,
        photo_compositor: PhotoCompositor | None = None,
    ):
        """Initialize the builder.

        Args:
            template: Layout to draw
            state: Text fields, photo and adjustments
            assets: Loaded static assets
            photo_compositor: PhotoCompositor instance (creates default if None)
        """
        self.template = template
        self.state = state
        self.assets = assets
        self.fonts = assets.fonts
        self.text_renderer = TextRenderer(self.fonts)
        self.photo_compositor = photo_compositor or PhotoCompositor()
        self.fields = state.field_values()

        self.image: Image.Image | None = None

    def _require_canvas(self, step: str) -> Image.Image:
        if self.image is None:
            raise CardRenderError(f"Must call create_canvas() before {step}()", stage=step)
        return self.image

    def create_canvas(self) -> "CardBuilder":
        """Start from a fully transparent canvas.

        Returns:
            Self for method chaining
        """
        logger.debug(f"Creating canvas: {CANVAS_SIZE[0]}x{CANVAS_SIZE[1]}")
        self.image = Image.new("RGBA", CANVAS_SIZE, (0, 0, 0, 0))
        return self

    def draw_background(self) -> "CardBuilder":
        """Cover-fit the background image, or paint the fallback gradient.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_background")
        background = self.assets.background

        if background is None:
            logger.debug("No background image, drawing fallback gradient")
            image.alpha_composite(linear_gradient(image.size, self.template.background.fallback))
            return self

        rect = cover_rect(background.size, image.size)
        image.alpha_composite(
            background.convert("RGBA").resize(image.size, Image.Resampling.LANCZOS, box=rect.box)
        )
        return self

    def draw_logo(self) -> "CardBuilder":
        """Stretch the logo into its box; skipped when the logo is missing.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_logo")
        logo = self.assets.logo

        if logo is None:
            logger.debug("No logo, skipping")
            return self

        x, y, w, h = self.template.logo.box
        composite_at(image, logo.convert("RGBA").resize((w, h), Image.Resampling.LANCZOS), (x, y))
        return self

    def draw_headline(self) -> "CardBuilder":
        """Draw the title runs in order.

        A run that follows the previous one starts where that run ended.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_headline")
        end_x = None

        for run in self.template.headline:
            text = self.text_renderer.format_text(run.text, self.fields)
            font = self.fonts.load_font(run.style.face, run.style.size)

            x, y = run.position
            if run.follows_previous and end_x is not None:
                x = end_x + x

            end_x = self.text_renderer.draw_text(image, (x, y), text, font, run.style)

        return self

    def draw_quote(self) -> "CardBuilder":
        """Draw the word-wrapped quote.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_quote")
        quote = self.template.quote

        text = self.text_renderer.format_text(quote.text, self.fields)
        font = self.fonts.load_font(quote.style.face, quote.style.size)

        self.text_renderer.wrap_text(
            ImageDraw.Draw(image),
            text,
            quote.position,
            font,
            quote.max_width,
            quote.line_height,
            ColorParser.parse(quote.style.color),
            quote.style.anchor,
        )
        return self

    def draw_polaroid(self) -> "CardBuilder":
        """Draw the framed photo, rotated about its center, with its shadow.

        The frame, the inset, the photo (or placeholder) and the in-frame
        captions are drawn on a layer of their own in frame coordinates;
        the layer is then rotated as a whole. The shadow is cast by the
        frame only.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_polaroid")
        polaroid = self.template.polaroid
        margin = POLAROID_LAYER_MARGIN
        origin = (margin, margin)

        layer_size = (polaroid.width + 2 * margin, polaroid.height + 2 * margin)
        layer = Image.new("RGBA", layer_size, (0, 0, 0, 0))
        mask = Image.new("L", layer_size, 0)

        frame_box = (margin, margin, polaroid.width, polaroid.height)
        fill_rect(layer, frame_box, polaroid.frame_color)
        ImageDraw.Draw(mask).rectangle(
            [(margin, margin), (margin + polaroid.width - 1, margin + polaroid.height - 1)], fill=255
        )

        ix, iy, iw, ih = polaroid.image_box
        photo_pos = (margin + ix, margin + iy)
        fill_rect(layer, (*photo_pos, iw, ih), polaroid.inset_color)

        if self.state.user_image is not None:
            area = self.photo_compositor.render_photo(self.state.user_image, (iw, ih), self.state)
            layer.alpha_composite(area, dest=photo_pos)
        else:
            self._draw_block(layer, polaroid.placeholder, origin)

        for caption in polaroid.captions:
            self._draw_block(layer, caption, origin)

        if polaroid.rotation:
            layer = layer.rotate(-polaroid.rotation, resample=Image.Resampling.BICUBIC, expand=True)
            mask = mask.rotate(-polaroid.rotation, resample=Image.Resampling.BICUBIC, expand=True)

        cx, cy = polaroid.center
        position = (round(cx - layer.width / 2), round(cy - layer.height / 2))

        shadow = ShadowEffect(polaroid.shadow)
        image.alpha_composite(shadow.create_shadow_layer(image.size, mask, position))
        composite_at(image, layer, position)

        logger.debug(f"Polaroid drawn at {position}, rotation {polaroid.rotation}")
        return self

    def draw_captions(self) -> "CardBuilder":
        """Draw the text blocks that sit outside the polaroid.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_captions")

        for caption in self.template.captions:
            self._draw_block(image, caption)

        return self

    def draw_decorations(self) -> "CardBuilder":
        """Draw the template's decorative shapes in order.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_decorations")

        for decoration in self.template.decorations:
            if isinstance(decoration, OutlineSquare):
                self._draw_outline_square(image, decoration)
            elif isinstance(decoration, Badge):
                self._draw_badge(image, decoration)
            else:
                raise CardRenderError(
                    f"Unknown decoration type {type(decoration).__name__}",
                    stage="draw_decorations",
                )

        return self

    def draw_footer(self) -> "CardBuilder":
        """Draw the footer text.

        Returns:
            Self for method chaining
        """
        image = self._require_canvas("draw_footer")
        self._draw_block(image, self.template.footer)
        return self

    def build(self) -> Image.Image:
        """Return the finished card.

        Returns:
            RGBA image of CANVAS_SIZE

        Raises:
            CardRenderError: If the canvas was never created
        """
        image = self._require_canvas("build")
        logger.info(f"Card built: {self.template.name} for '{self.state.name}'")
        return image

    def _draw_block(
        self,
        image: Image.Image,
        block: TextBlock,
        origin: tuple[int, int] = (0, 0),
    ) -> None:
        """Draw one text block, auto-fitting and backing it as configured."""
        style = block.style
        text = self.text_renderer.format_text(block.text, self.fields)

        if block.fit_sizes:
            font, _ = self.text_renderer.fit_font(
                text, style.face, block.fit_sizes, block.max_width, style.letter_spacing
            )
        else:
            font = self.fonts.load_font(style.face, style.size)

        x = block.position[0] + origin[0]
        y = block.position[1] + origin[1]

        if block.backdrop is not None:
            backdrop = block.backdrop
            width = self.text_renderer.measure_text(text, font, style.letter_spacing)
            left = self.text_renderer.anchor_left(x, width, style.anchor)
            fill_rect(
                image,
                (
                    round(left - backdrop.padding_x),
                    y + backdrop.top,
                    round(width + 2 * backdrop.padding_x),
                    backdrop.height,
                ),
                backdrop.color,
            )

        self.text_renderer.draw_text(image, (x, y), text, font, style)

    def _draw_outline_square(self, image: Image.Image, square: OutlineSquare) -> None:
        """Stroke a square rotated clockwise about its center."""
        cx, cy = square.center
        half = square.size / 2
        angle = math.radians(square.angle)
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        corners = [(-half, -half), (half, -half), (half, half), (-half, half)]
        points = [(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a) for dx, dy in corners]

        ImageDraw.Draw(image).polygon(
            points, outline=ColorParser.parse(square.color), width=square.width
        )

    def _draw_badge(self, image: Image.Image, badge: Badge) -> None:
        """Fill the badge box and draw its texts on top."""
        fill_rect(image, badge.box, badge.color)
        for text in badge.texts:
            self._draw_block(image, text)
