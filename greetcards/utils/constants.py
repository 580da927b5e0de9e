"""Constants for greeting card generation.

This module contains the canvas geometry, adjustment ranges and asset
lookup locations shared by every template, named and type-safe.
"""

from pathlib import Path
from typing import Final

# Canvas
CANVAS_WIDTH: Final[int] = 1080
CANVAS_HEIGHT: Final[int] = 1080
CANVAS_SIZE: Final[tuple[int, int]] = (CANVAS_WIDTH, CANVAS_HEIGHT)

# Photo adjustment defaults
DEFAULT_BRIGHTNESS: Final[int] = 0
DEFAULT_CONTRAST: Final[int] = 100
DEFAULT_SATURATION: Final[int] = 100
DEFAULT_ROTATION: Final[int] = 0
DEFAULT_ZOOM: Final[float] = 1.0
DEFAULT_OFFSET: Final[int] = 0

# Photo adjustment ranges (as bounded by the editing sliders)
BRIGHTNESS_RANGE: Final[tuple[int, int]] = (-50, 50)
CONTRAST_RANGE: Final[tuple[int, int]] = (0, 200)
SATURATION_RANGE: Final[tuple[int, int]] = (0, 200)
ROTATION_RANGE: Final[tuple[int, int]] = (-180, 180)
ZOOM_SLIDER_RANGE: Final[tuple[float, float]] = (1.0, 3.0)

# Smallest zoom the crop computation uses; below it the crop would outgrow the photo
MIN_ZOOM: Final[float] = 1.0

# Brightness slider is remapped onto a percentage: 100 + 2 * value
BRIGHTNESS_PERCENT_BASE: Final[int] = 100
BRIGHTNESS_PERCENT_SCALE: Final[int] = 2

# Canvas-style shadow blur is twice the Gaussian standard deviation
SHADOW_BLUR_TO_RADIUS: Final[float] = 0.5

# Extra room around the polaroid layer so overflowing captions are not clipped
POLAROID_LAYER_MARGIN: Final[int] = 64

# Output
OUTPUT_FORMAT: Final[str] = "png"
DEFAULT_COMPRESS_LEVEL: Final[int] = 6

# Assets
PACKAGE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DEFAULT_ASSETS_DIR: Final[Path] = PACKAGE_DIR / "assets"
FONTS_SUBDIR: Final[str] = "fonts"
ASSET_LOAD_WORKERS: Final[int] = 4

# Font system directories
FONT_DIRECTORIES: Final[tuple[str, ...]] = (
    "/usr/share/fonts/",  # Linux
    "/System/Library/Fonts/",  # macOS
    "C:\\Windows\\Fonts\\",  # Windows
    "~/.fonts/",  # User fonts on Linux
    "~/Library/Fonts/",  # User fonts on macOS
)

# Font file extensions
FONT_EXTENSIONS: Final[tuple[str, ...]] = (".ttf", ".otf", ".ttc")

# Default fallback fonts (in order of preference)
DEFAULT_FONTS: Final[tuple[str, ...]] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Linux
    "/System/Library/Fonts/Helvetica.ttc",  # macOS
    "C:\\Windows\\Fonts\\arial.ttf",  # Windows
)
