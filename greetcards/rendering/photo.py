"""User photo placement.

This module computes which part of the user photo is visible inside the
polaroid's photo area for a given zoom and pan, and renders that area with
the color filters and rotation applied.
"""

import math
from dataclasses import dataclass

from PIL import Image

from greetcards.data.models import CardState
from greetcards.rendering.effects import ColorFilter
from greetcards.utils.constants import (
    BRIGHTNESS_PERCENT_BASE,
    BRIGHTNESS_PERCENT_SCALE,
    MIN_ZOOM,
)
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceRect:
    """Rectangle of the source image, in source pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def box(self) -> tuple[float, float, float, float]:
        """(left, upper, right, lower) for Image.resize(box=...)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def compute_source_rect(
    src_size: tuple[int, int],
    dst_size: tuple[int, int],
    zoom: float = 1.0,
    offset_x: float = 0,
    offset_y: float = 0,
) -> SourceRect:
    """Find the part of the source image that fills the destination.

    The source is cropped to the destination aspect ratio (cover fit),
    shrunk by the zoom factor, centered and then shifted by the pan
    offsets: a positive offset moves the picture right/down, so the window
    moves left/up. Zoom below MIN_ZOOM (or not a finite number) is treated
    as MIN_ZOOM, so the crop keeps the destination aspect ratio and never
    outgrows the source; the window is kept inside the source image.

    Args:
        src_size: (width, height) of the source image
        dst_size: (width, height) of the destination area
        zoom: Magnification, 1.0 = plain cover fit
        offset_x: Horizontal pan in source pixels
        offset_y: Vertical pan in source pixels

    Returns:
        Source rectangle to resample into the destination

    Example:
        >>> compute_source_rect((1000, 1000), (500, 600), zoom=2, offset_x=50)
        SourceRect(x=241.66..., y=250.0, width=416.66..., height=500.0)
    """
    src_w, src_h = src_size
    dst_w, dst_h = dst_size

    src_ratio = src_w / src_h
    dst_ratio = dst_w / dst_h

    if src_ratio > dst_ratio:
        height = float(src_h)
        width = src_h * dst_ratio
    else:
        width = float(src_w)
        height = src_w / dst_ratio

    if not math.isfinite(zoom) or zoom < MIN_ZOOM:
        zoom = MIN_ZOOM
    width /= zoom
    height /= zoom

    offset_x = offset_x if math.isfinite(offset_x) else 0.0
    offset_y = offset_y if math.isfinite(offset_y) else 0.0

    x = (src_w - width) / 2 - offset_x
    y = (src_h - height) / 2 - offset_y

    x = min(max(x, 0.0), src_w - width)
    y = min(max(y, 0.0), src_h - height)

    return SourceRect(x, y, width, height)


def cover_rect(src_size: tuple[int, int], dst_size: tuple[int, int]) -> SourceRect:
    """Centered cover-fit crop, as used for backgrounds."""
    return compute_source_rect(src_size, dst_size)


def filter_parameters(state: CardState) -> tuple[float, float, float]:
    """Brightness, contrast and saturation percentages for the photo.

    The brightness slider (-50..50) maps onto 0..200 percent.
    """
    brightness = BRIGHTNESS_PERCENT_BASE + BRIGHTNESS_PERCENT_SCALE * state.brightness
    return (brightness, state.contrast, state.saturation)


class PhotoCompositor:
    """Renders the user photo into the polaroid's photo area.

    The result is exactly the size of the area, which is what clips the
    photo; rotated corners are left transparent so the frame's inset color
    shows through.

    Example:
        >>> area = PhotoCompositor().render_photo(photo, (504, 500), state)
    """

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS):
        self.resample = resample

    def render_photo(
        self,
        photo: Image.Image,
        size: tuple[int, int],
        state: CardState,
    ) -> Image.Image:
        """Crop, resample, filter and rotate the photo.

        Args:
            photo: Decoded user photo
            size: (width, height) of the photo area
            state: Adjustments to apply

        Returns:
            RGBA image of the given size
        """
        rect = compute_source_rect(photo.size, size, state.zoom, state.offset_x, state.offset_y)
        logger.debug(f"Photo crop {rect} -> {size}")

        area = photo.convert("RGBA").resize(size, self.resample, box=rect.box)
        area = ColorFilter(*filter_parameters(state)).apply(area)

        if state.rotation:
            # Pillow rotates counter-clockwise
            area = area.rotate(
                -state.rotation,
                resample=Image.Resampling.BICUBIC,
                expand=False,
            )

        return area
