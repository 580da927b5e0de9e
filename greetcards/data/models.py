"""Data models for card state and loaded assets.

This module defines the mutable state record a session edits and the
immutable bundle of static assets a render reads.
"""

import copy
from dataclasses import dataclass, field, fields

from PIL import Image

from greetcards.resources.fonts import FontLoader
from greetcards.utils.constants import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_CONTRAST,
    DEFAULT_SATURATION,
    DEFAULT_ROTATION,
    DEFAULT_ZOOM,
    DEFAULT_OFFSET,
)

TEXT_FIELDS: tuple[str, ...] = (
    "year",
    "suffix",
    "date",
    "month",
    "quote",
    "name",
    "designation",
    "department",
    "doj",
)

ADJUSTMENT_FIELDS: tuple[str, ...] = (
    "brightness",
    "contrast",
    "saturation",
    "rotation",
    "zoom",
    "offset_x",
    "offset_y",
)


@dataclass
class CardState:
    """Everything a single card render reads, apart from static assets.

    Text fields are plain strings; an empty string renders blank. The record
    carries the fields of both templates and each template reads its own.
    Adjustments are independent of each other and of the text.

    Attributes:
        template: Template key ("anniversary" or "birthday")
        year, suffix, doj: Anniversary fields ("1", "st", joining date)
        date, month: Birthday badge fields
        quote, name, designation, department: Shared fields
        user_image: Decoded photo, or None to render the placeholder
        brightness: -50..50, mapped to a 0-200% multiplier
        contrast: 0..200 percent
        saturation: 0..200 percent
        rotation: Degrees, clockwise, about the photo area center
        zoom: Crop magnification (>= 1 from the UI)
        offset_x, offset_y: Pan in source-image pixels

    Example:
        >>> state = CardState(name="Jane Doe", zoom=2.0)
        >>> state.reset_adjustments()
        >>> state.zoom
        1.0
    """

    template: str = "anniversary"

    year: str = "1"
    suffix: str = "st"
    date: str = "01"
    month: str = "JAN"
    quote: str = ""
    name: str = ""
    designation: str = ""
    department: str = ""
    doj: str = ""

    user_image: Image.Image | None = field(default=None, repr=False, compare=False)

    brightness: int = DEFAULT_BRIGHTNESS
    contrast: int = DEFAULT_CONTRAST
    saturation: int = DEFAULT_SATURATION
    rotation: float = DEFAULT_ROTATION
    zoom: float = DEFAULT_ZOOM
    offset_x: int = DEFAULT_OFFSET
    offset_y: int = DEFAULT_OFFSET

    def __post_init__(self) -> None:
        self.template = self.template.lower().strip()

    def field_values(self) -> dict[str, str]:
        """Text fields as a mapping for formatting template strings."""
        return {name: getattr(self, name) for name in TEXT_FIELDS}

    def reset_adjustments(self) -> None:
        """Restore every photo adjustment to its default."""
        self.brightness = DEFAULT_BRIGHTNESS
        self.contrast = DEFAULT_CONTRAST
        self.saturation = DEFAULT_SATURATION
        self.rotation = DEFAULT_ROTATION
        self.zoom = DEFAULT_ZOOM
        self.offset_x = DEFAULT_OFFSET
        self.offset_y = DEFAULT_OFFSET

    @property
    def has_adjustments(self) -> bool:
        """True if any adjustment differs from its default."""
        defaults = CardState()
        return any(getattr(self, name) != getattr(defaults, name) for name in ADJUSTMENT_FIELDS)

    def snapshot(self) -> "CardState":
        """Shallow copy for rendering; the photo is shared, never mutated."""
        return copy.copy(self)

    def update(self, **changes) -> None:
        """Set several fields at once.

        Raises:
            AttributeError: If a name is not a CardState field
        """
        known = {f.name for f in fields(self)}
        for name, value in changes.items():
            if name not in known:
                raise AttributeError(f"CardState has no field '{name}'")
            setattr(self, name, value)


@dataclass(frozen=True)
class AssetResult:
    """Outcome of loading one static asset.

    Either ``value`` holds the loaded asset or ``error`` says why the
    render will use a fallback instead.
    """

    name: str
    value: object = None
    error: str | None = None

    @property
    def loaded(self) -> bool:
        return self.error is None and self.value is not None


@dataclass
class CardAssets:
    """Static assets for one template, loaded once at startup.

    Attributes:
        background: Background image, or None for the gradient fallback
        logo: Logo image, or None to skip it
        fonts: Font loader resolving the template's faces
        results: Per-asset load outcomes, for reporting
    """

    fonts: FontLoader
    background: Image.Image | None = None
    logo: Image.Image | None = None
    results: list[AssetResult] = field(default_factory=list)

    @property
    def failures(self) -> list[AssetResult]:
        return [result for result in self.results if not result.loaded]
