"""Visual effects used by the card compositor.

This module provides the drop shadow behind the polaroid frame, canvas-style
linear gradients (backgrounds and gradient text) and the CSS-style color
filter chain applied to the user photo.
"""

import numpy as np
from PIL import Image, ImageFilter

from greetcards.config.models import GradientSpec, ShadowConfig
from greetcards.resources.colors import ColorParser
from greetcards.utils.constants import SHADOW_BLUR_TO_RADIUS
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

# Luminance coefficients of the CSS saturate() matrix
LUMA_R = 0.213
LUMA_G = 0.715
LUMA_B = 0.072


def linear_gradient(
    size: tuple[int, int],
    spec: GradientSpec,
    origin: tuple[float, float] = (0, 0),
) -> Image.Image:
    """Render a linear gradient into an RGBA image.

    The gradient is defined in canvas coordinates; ``origin`` is where the
    image's top-left corner sits on the canvas, so a layer smaller than the
    canvas still lines up with the canvas gradient. Pixels before the start
    point take the first stop color and pixels past the end point the last.

    Args:
        size: (width, height) of the image
        spec: Gradient definition
        origin: Canvas position of the image's top-left corner

    Returns:
        RGBA image filled with the gradient
    """
    width, height = size
    start_x, start_y = spec.start
    dx = spec.end[0] - start_x
    dy = spec.end[1] - start_y
    length_sq = dx * dx + dy * dy

    # Sample at pixel centers
    xs = np.arange(width, dtype=np.float64) + origin[0] + 0.5 - start_x
    ys = np.arange(height, dtype=np.float64) + origin[1] + 0.5 - start_y

    if length_sq == 0:
        t = np.zeros((height, width))
    else:
        t = (xs[np.newaxis, :] * dx + ys[:, np.newaxis] * dy) / length_sq
    t = np.clip(t, 0.0, 1.0)

    offsets = np.array([offset for offset, _ in spec.stops], dtype=np.float64)
    colors = np.array([ColorParser.parse(color) for _, color in spec.stops], dtype=np.float64)

    channels = [np.interp(t, offsets, colors[:, i]) for i in range(4)]
    pixels = np.round(np.stack(channels, axis=-1)).astype(np.uint8)

    return Image.fromarray(pixels)


class ShadowEffect:
    """Drop shadow of an arbitrary shape, canvas style.

    The shadow is the shape's silhouette in the shadow color, moved by the
    configured offset and blurred with a Gaussian whose radius is half the
    canvas blur value.

    Example:
        >>> shadow = ShadowEffect(ShadowConfig("rgba(0, 0, 0, 0.2)", 40, 10, 20))
        >>> layer = shadow.create_shadow_layer((1080, 1080), frame_mask, (300, 190))
    """

    def __init__(self, config: ShadowConfig):
        self.config = config

    @property
    def blur_radius(self) -> float:
        return self.config.blur * SHADOW_BLUR_TO_RADIUS

    def create_shadow_layer(
        self,
        canvas_size: tuple[int, int],
        mask: Image.Image,
        position: tuple[int, int],
    ) -> Image.Image:
        """Create a canvas-sized layer holding the shadow of ``mask``.

        Args:
            canvas_size: (width, height) of the canvas
            mask: "L" image, the shape casting the shadow
            position: Where the shape's top-left corner sits on the canvas

        Returns:
            RGBA layer to composite below the shape
        """
        color = ColorParser.parse(self.config.color)

        coverage = np.asarray(mask.convert("L"), dtype=np.float32) * (color[3] / 255.0)
        silhouette = Image.new("RGBA", mask.size, (*color[:3], 0))
        silhouette.putalpha(Image.fromarray(np.round(coverage).astype(np.uint8)))

        layer = Image.new("RGBA", canvas_size, (*color[:3], 0))
        layer.paste(
            silhouette,
            (position[0] + self.config.offset_x, position[1] + self.config.offset_y),
        )

        if self.blur_radius > 0:
            layer = layer.filter(ImageFilter.GaussianBlur(radius=self.blur_radius))

        logger.debug(f"Shadow created with blur radius {self.blur_radius:.2f}")
        return layer


class ColorFilter:
    """CSS filter chain ``brightness() contrast() saturate()`` on RGB pixels.

    All amounts are percentages (100 = unchanged). Each step clamps to the
    displayable range before the next one, as browsers do. Alpha is kept.

    Example:
        >>> ColorFilter(200, 100, 100).apply(photo)  # twice as bright
    """

    def __init__(self, brightness: float = 100, contrast: float = 100, saturate: float = 100):
        self.brightness = brightness
        self.contrast = contrast
        self.saturate = saturate

    @property
    def is_identity(self) -> bool:
        return self.brightness == 100 and self.contrast == 100 and self.saturate == 100

    @staticmethod
    def saturate_matrix(amount: float) -> np.ndarray:
        """3x3 matrix of CSS saturate() for an amount where 1.0 = unchanged."""
        s = amount
        return np.array(
            [
                [LUMA_R + (1 - LUMA_R) * s, LUMA_G - LUMA_G * s, LUMA_B - LUMA_B * s],
                [LUMA_R - LUMA_R * s, LUMA_G + (1 - LUMA_G) * s, LUMA_B - LUMA_B * s],
                [LUMA_R - LUMA_R * s, LUMA_G - LUMA_G * s, LUMA_B + (1 - LUMA_B) * s],
            ],
            dtype=np.float32,
        )

    def apply(self, image: Image.Image) -> Image.Image:
        """Return a filtered RGBA copy of ``image``."""
        image = image.convert("RGBA")
        if self.is_identity:
            return image.copy()

        pixels = np.asarray(image, dtype=np.float32) / 255.0
        rgb = pixels[..., :3]

        if self.brightness != 100:
            rgb = np.clip(rgb * (self.brightness / 100.0), 0.0, 1.0)
        if self.contrast != 100:
            rgb = np.clip((rgb - 0.5) * (self.contrast / 100.0) + 0.5, 0.0, 1.0)
        if self.saturate != 100:
            rgb = np.clip(rgb @ self.saturate_matrix(self.saturate / 100.0).T, 0.0, 1.0)

        out = np.empty_like(pixels)
        out[..., :3] = rgb
        out[..., 3] = pixels[..., 3]

        return Image.fromarray(np.round(out * 255.0).astype(np.uint8))
