"""Configuration data models for greeting card generation.

This module defines two kinds of dataclasses:
- Declarative layout models (fonts, text styles, polaroid frame, decorations)
  from which each card template is assembled.
- Runtime settings (RenderConfig, OutputConfig) with JSON load/save.

Layout models are frozen so a template can never be mutated by a render.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from greetcards.utils.constants import DEFAULT_ASSETS_DIR, DEFAULT_COMPRESS_LEVEL, FONTS_SUBDIR
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class FontFace:
    """A font face used by a template.

    Attributes:
        file: File name under the assets font directory
        family: Name used to look the face up among system fonts
    """

    file: str
    family: str


@dataclass(frozen=True)
class GradientSpec:
    """Two-point linear gradient, canvas style.

    Pixels before ``start`` take the first stop color and pixels past
    ``end`` the last one.

    Attributes:
        start: Gradient start point in canvas coordinates
        end: Gradient end point in canvas coordinates
        stops: (offset 0-1, color) pairs in ascending offset order
    """

    start: Point
    end: Point
    stops: tuple[tuple[float, str], ...]

    def __post_init__(self) -> None:
        if len(self.stops) < 2:
            raise ValueError(f"Gradient needs at least two stops, got {len(self.stops)}")
        offsets = [offset for offset, _ in self.stops]
        if offsets != sorted(offsets) or not all(0.0 <= o <= 1.0 for o in offsets):
            raise ValueError(f"Gradient stop offsets must ascend within 0-1, got {offsets}")


@dataclass(frozen=True)
class TextStyle:
    """How a piece of text is drawn.

    Attributes:
        face: Font face
        size: Font size in pixels
        color: Fill color (ignored when gradient is set)
        anchor: Pillow text anchor ("la" = left/top, "ms" = center/baseline, ...)
        letter_spacing: Extra advance after each character in pixels
        gradient: Optional gradient fill in canvas coordinates
    """

    face: FontFace
    size: int
    color: str = "#000000"
    anchor: str = "la"
    letter_spacing: float = 0
    gradient: GradientSpec | None = None

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Font size must be positive, got {self.size}")


@dataclass(frozen=True)
class Backdrop:
    """Solid box drawn behind a text block and sized to the text.

    The box spans from ``padding_x`` left of the text origin to
    ``padding_x`` right of the text end, and from ``top`` (relative to the
    text y) down ``height`` pixels.
    """

    color: str
    padding_x: int
    top: int
    height: int


@dataclass(frozen=True)
class TextBlock:
    """A single line of text bound to the card state.

    Attributes:
        text: Format string over the state fields, e.g. "DOJ : {doj}"
        position: Anchor point
        style: Text style (style.size is the largest auto-fit candidate)
        fit_sizes: Descending candidate sizes for auto-fit (empty = fixed size)
        max_width: Width the text must fit when auto-fitting
        backdrop: Optional box behind the text
    """

    text: str
    position: Point
    style: TextStyle
    fit_sizes: tuple[int, ...] = ()
    max_width: int | None = None
    backdrop: Backdrop | None = None

    def __post_init__(self) -> None:
        if self.fit_sizes and self.max_width is None:
            raise ValueError("max_width is required when fit_sizes are given")
        if list(self.fit_sizes) != sorted(self.fit_sizes, reverse=True):
            raise ValueError(f"fit_sizes must be descending, got {self.fit_sizes}")


@dataclass(frozen=True)
class TextRun:
    """One part of a headline.

    A run that follows the previous one starts where the previous run's
    text ended, shifted by ``position[0]``; ``position[1]`` stays absolute.
    """

    text: str
    position: Point
    style: TextStyle
    follows_previous: bool = False


@dataclass(frozen=True)
class QuoteBlock:
    """Word-wrapped quote."""

    text: str
    position: Point
    style: TextStyle
    max_width: int
    line_height: int


@dataclass(frozen=True)
class ShadowConfig:
    """Drop shadow, canvas style (blur is twice the Gaussian sigma).

    Attributes:
        color: Shadow color including alpha
        blur: Canvas shadowBlur value
        offset_x: Horizontal offset in canvas pixels
        offset_y: Vertical offset in canvas pixels
    """

    color: str
    blur: float
    offset_x: int
    offset_y: int

    def __post_init__(self) -> None:
        if self.blur < 0:
            raise ValueError(f"Shadow blur cannot be negative, got {self.blur}")


@dataclass(frozen=True)
class PolaroidConfig:
    """The framed photo assembly.

    Positions of ``placeholder`` and ``captions`` are local to the frame's
    top-left corner; the whole frame is rotated by ``rotation`` degrees
    (clockwise) about ``center``.
    """

    center: Point
    width: int
    height: int
    padding: int
    image_height: int
    rotation: float
    frame_color: str
    inset_color: str
    shadow: ShadowConfig
    placeholder: TextBlock
    captions: tuple[TextBlock, ...] = ()

    @property
    def image_box(self) -> tuple[int, int, int, int]:
        """Photo area (x, y, width, height) in frame-local coordinates."""
        return (self.padding, self.padding, self.width - 2 * self.padding, self.image_height)


@dataclass(frozen=True)
class LogoConfig:
    """Logo file and the box it is stretched into."""

    file: str
    box: tuple[int, int, int, int]


@dataclass(frozen=True)
class BackgroundConfig:
    """Background file and the gradient drawn when it is missing."""

    file: str
    fallback: GradientSpec


@dataclass(frozen=True)
class OutlineSquare:
    """Stroked square rotated about its center."""

    center: Point
    size: int
    angle: float
    color: str
    width: int


@dataclass(frozen=True)
class Badge:
    """Filled box with text blocks on top of it."""

    box: tuple[int, int, int, int]
    color: str
    texts: tuple[TextBlock, ...] = ()


@dataclass(frozen=True)
class CardTemplate:
    """Everything that differs between card designs.

    Attributes:
        name: Template key ("anniversary", "birthday")
        file_prefix: Prefix of exported file names
        fonts: Faces loaded at startup
        background: Background asset and fallback
        logo: Logo asset and box
        headline: Title runs, drawn in order
        quote: Wrapped quote
        polaroid: Framed photo assembly
        captions: Text blocks drawn after the polaroid
        decorations: OutlineSquare / Badge elements drawn after captions
        footer: Footer text
    """

    name: str
    file_prefix: str
    fonts: tuple[FontFace, ...]
    background: BackgroundConfig
    logo: LogoConfig
    headline: tuple[TextRun, ...]
    quote: QuoteBlock
    polaroid: PolaroidConfig
    captions: tuple[TextBlock, ...]
    decorations: tuple[OutlineSquare | Badge, ...]
    footer: TextBlock


@dataclass
class OutputConfig:
    """Configuration for exported files.

    Attributes:
        compress_level: zlib level for PNG (0-9); PNG is lossless at every level
        skip_existing: Skip export if the file already exists
    """

    compress_level: int = DEFAULT_COMPRESS_LEVEL
    skip_existing: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.compress_level <= 9:
            raise ValueError(f"compress_level must be between 0 and 9, got {self.compress_level}")


@dataclass
class RenderConfig:
    """Runtime settings for a card session or batch run.

    Attributes:
        template: Template key
        assets_dir: Directory holding backgrounds, logo and fonts/
        output: Output configuration
        debug: Enable debug output
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """

    template: str = "anniversary"
    assets_dir: str = str(DEFAULT_ASSETS_DIR)
    output: OutputConfig = field(default_factory=OutputConfig)
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    @property
    def fonts_dir(self) -> Path:
        return Path(self.assets_dir) / FONTS_SUBDIR

    def asset_path(self, file_name: str) -> Path:
        """Path of a static asset inside the assets directory."""
        return Path(self.assets_dir) / file_name

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self, filepath: str | Path) -> None:
        """Save configuration to a JSON file."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Saved configuration to {path}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        """Create configuration from a dictionary, rebuilding nested output settings."""
        data = dict(data)
        if "output" in data and isinstance(data["output"], dict):
            data["output"] = OutputConfig(**data["output"])

        return cls(**data)

    @classmethod
    def from_json(cls, filepath: str | Path) -> "RenderConfig":
        """Load configuration from a JSON file."""
        path = Path(filepath)

        with open(path, "r") as f:
            data = json.load(f)

        logger.info(f"Loaded configuration from {path}")
        return cls.from_dict(data)
