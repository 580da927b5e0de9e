"""Card export utilities.

This module serializes finished cards to PNG and writes them to disk
atomically: a card file is either complete or absent, never partial.
"""

import io
import os
import re
import tempfile
from pathlib import Path

from PIL import Image

from greetcards.config.models import OutputConfig
from greetcards.utils.constants import OUTPUT_FORMAT
from greetcards.utils.exceptions import ExportError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


class CardExporter:
    """Writes rendered cards as PNG files.

    Example:
        >>> exporter = CardExporter(OutputConfig())
        >>> exporter.output_filename("Anniversary", "Jane Doe")
        'Anniversary_Jane_Doe.png'
        >>> path = exporter.save(image, "cards/", "Anniversary_Jane_Doe.png")
    """

    def __init__(self, output_config: OutputConfig | None = None):
        """Initialize card exporter.

        Args:
            output_config: Output configuration (defaults if None)
        """
        self.config = output_config or OutputConfig()

    @staticmethod
    def output_filename(prefix: str, name: str) -> str:
        """File name for a card: every whitespace run in the name becomes one underscore."""
        return f"{prefix}_{_WHITESPACE.sub('_', name)}.{OUTPUT_FORMAT}"

    def to_png_bytes(self, image: Image.Image) -> bytes:
        """Encode an image as lossless PNG.

        Raises:
            ExportError: If encoding fails
        """
        buffer = io.BytesIO()
        try:
            image.save(
                buffer,
                format="PNG",
                optimize=False,
                compress_level=self.config.compress_level,
            )
        except (OSError, ValueError) as e:
            raise ExportError(f"Failed to encode image: {e}", format=OUTPUT_FORMAT) from e

        return buffer.getvalue()

    def save(self, image: Image.Image, output_dir: str | Path, filename: str) -> Path:
        """Save a card into a directory.

        The PNG is written to a temporary file next to the target and then
        renamed over it.

        Args:
            image: Rendered card
            output_dir: Output directory (created if missing)
            filename: File name including extension

        Returns:
            Path to saved file

        Raises:
            ExportError: If encoding or writing fails; no file is left behind
        """
        output_path = Path(output_dir) / filename

        if self.config.skip_existing and output_path.exists():
            logger.info(f"Skipping existing file: {output_path}")
            return output_path

        data = self.to_png_bytes(image)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{output_path.stem}.", suffix=".tmp", dir=output_path.parent
            )
        except OSError as e:
            raise ExportError(
                f"Failed to prepare output: {e}", output_path=str(output_path), format=OUTPUT_FORMAT
            ) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, output_path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise ExportError(
                f"Failed to save image: {e}", output_path=str(output_path), format=OUTPUT_FORMAT
            ) from e

        logger.info(f"Saved card: {output_path}")
        return output_path
