"""Font discovery and loading utilities.

This module resolves the template font faces to font files (the bundled
assets directory first, then the system font directories) and loads them
at arbitrary sizes with a fallback chain that always yields a usable font.
"""

import os
import threading
from pathlib import Path

from PIL import ImageFont

from greetcards.config.models import FontFace
from greetcards.utils.constants import (
    FONT_DIRECTORIES,
    FONT_EXTENSIONS,
    DEFAULT_FONTS,
)
from greetcards.utils.exceptions import FontLoadError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontDiscovery:
    """Discovers and caches available fonts on the system.

    System font directories are scanned once; the result is shared by
    every loader.

    Attributes:
        _font_cache: Cached list of discovered fonts
        _cache_lock: Thread lock for protecting cache access
    """

    _font_cache: list[Path] | None = None
    _cache_lock: threading.Lock = threading.Lock()

    @classmethod
    def discover_fonts(cls) -> list[Path]:
        """Discover all available fonts on the system.

        Thread-safe: fonts are resolved from the asset loader's worker
        threads.

        Returns:
            List of paths to font files
        """
        if cls._font_cache is not None:
            return cls._font_cache

        with cls._cache_lock:
            if cls._font_cache is not None:
                return cls._font_cache

            logger.debug("Discovering system fonts...")
            fonts: list[Path] = []

            for font_dir_str in FONT_DIRECTORIES:
                font_dir = Path(os.path.expanduser(font_dir_str))

                if not font_dir.exists():
                    continue

                try:
                    for root, dirs, files in os.walk(font_dir):
                        for file in files:
                            if file.lower().endswith(FONT_EXTENSIONS):
                                fonts.append(Path(root) / file)
                except PermissionError:
                    logger.warning(f"Permission denied accessing font directory: {font_dir}")

            cls._font_cache = fonts
            logger.debug(f"Discovered {len(fonts)} fonts on system")

            return fonts

    @classmethod
    def find_font_by_name(cls, name: str) -> Path | None:
        """Find a font file by name, exact stem match first, then substring.

        Args:
            name: Font name or partial name (e.g. "Poppins-Bold")

        Returns:
            Path to font file if found, None otherwise
        """
        fonts = cls.discover_fonts()
        name_lower = name.lower()

        for font_path in fonts:
            if name_lower == font_path.stem.lower():
                return font_path

        for font_path in fonts:
            if name_lower in font_path.name.lower():
                return font_path

        return None

    @classmethod
    def get_default_font(cls) -> Path | None:
        """Get a default system font, or None if none is installed."""
        for font_str in DEFAULT_FONTS:
            font_path = Path(font_str)
            if font_path.exists():
                return font_path

        return None


class FontLoader:
    """Loads template font faces at any size with fallback logic.

    Resolution order for a face: the file under ``font_dir``, a system font
    whose name matches the face's family, the default system font, and
    finally Pillow's bundled font. Loaded fonts are cached per size, which
    never changes what is drawn.

    Example:
        >>> loader = FontLoader(Path("greetcards/assets/fonts"))
        >>> font = loader.load_font(FontFace("poppins-bold.ttf", "Poppins-Bold"), 36)
    """

    def __init__(self, font_dir: str | Path | None = None, discovery: FontDiscovery | None = None):
        """Initialize the font loader.

        Args:
            font_dir: Directory holding the template font files
            discovery: FontDiscovery instance (creates default if None)
        """
        self.font_dir = Path(font_dir) if font_dir else None
        self.discovery = discovery or FontDiscovery()
        self._paths: dict[FontFace, Path | None] = {}
        self._fonts: dict[tuple[FontFace | None, int], Font] = {}
        self._lock = threading.Lock()

    def resolve(self, face: FontFace) -> Path:
        """Resolve a face to a font file, remembering the outcome.

        Args:
            face: Font face to resolve

        Returns:
            Path to a loadable font file

        Raises:
            FontLoadError: If neither the asset file nor a matching system
                font can be loaded; the face then renders with the default font
        """
        attempted = []

        candidates = []
        if self.font_dir is not None:
            candidates.append(self.font_dir / face.file)
        discovered = self.discovery.find_font_by_name(face.family)
        if discovered is not None:
            candidates.append(discovered)

        for path in candidates:
            attempted.append(str(path))
            if not path.exists():
                continue
            try:
                ImageFont.truetype(str(path), size=12)
            except OSError as e:
                logger.warning(f"Cannot load font {path}: {e}")
                continue

            with self._lock:
                self._paths[face] = path
            logger.debug(f"Resolved font '{face.family}' to {path}")
            return path

        with self._lock:
            self._paths[face] = None
        raise FontLoadError("Font not found", font_spec=face.family, attempted_paths=attempted)

    def load_font(self, face: FontFace | None, size: int) -> Font:
        """Load a face at a size, falling back to the default font.

        Args:
            face: Font face (None = default font)
            size: Font size in pixels

        Returns:
            Loaded font object
        """
        key = (face, size)
        cached = self._fonts.get(key)
        if cached is not None:
            return cached

        path = None
        if face is not None:
            if face not in self._paths:
                try:
                    self.resolve(face)
                except FontLoadError as e:
                    logger.warning(f"{e}. Using default font.")
            path = self._paths.get(face)

        font = ImageFont.truetype(str(path), size=size) if path else self._load_default_font(size)
        self._fonts[key] = font
        return font

    def _load_default_font(self, size: int) -> Font:
        """Load a default system font, or Pillow's bundled font at this size."""
        default_path = self.discovery.get_default_font()

        if default_path:
            try:
                return ImageFont.truetype(str(default_path), size=size)
            except OSError as e:
                logger.warning(f"Cannot load default font {default_path}: {e}")

        return ImageFont.load_default(size=size)
