"""Sheet row extraction utilities.

This module turns one spreadsheet row into a CardState: columns are found
through their aliases, text is stripped, adjustments are parsed as numbers
and the photo path (relative to the sheet) is decoded.
"""

import math
from pathlib import Path
from typing import Any

import pandas as pd
from PIL import Image

from greetcards.data.models import CardState
from greetcards.resources.assets import decode_image
from greetcards.utils.exceptions import ImageDecodeError, InvalidSheetDataError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


class ColumnMapper:
    """Maps sheet columns to CardState field names.

    Matching ignores case and surrounding whitespace.

    Example:
        >>> ColumnMapper.find_column(row, "doj")
        'Date of Joining'
    """

    COLUMN_ALIASES: dict[str, list[str]] = {
        "name": ["Name", "Full Name", "Employee Name"],
        "designation": ["Designation", "Title", "Job Title", "Role"],
        "department": ["Department", "Dept", "Team"],
        "quote": ["Quote", "Message", "Wish"],
        "year": ["Year", "Years"],
        "suffix": ["Suffix", "Year Suffix"],
        "doj": ["DOJ", "Date of Joining", "Joining Date"],
        "date": ["Date", "Day"],
        "month": ["Month"],
        "photo": ["Photo", "Image", "Picture", "Photo Path"],
        "brightness": ["Brightness"],
        "contrast": ["Contrast"],
        "saturation": ["Saturation"],
        "rotation": ["Rotation", "Rotate"],
        "zoom": ["Zoom"],
        "offset_x": ["Offset X", "Pan X"],
        "offset_y": ["Offset Y", "Pan Y"],
    }

    @classmethod
    def find_column_by_name(cls, row: pd.Series, field_name: str) -> str | None:
        """Find the column for a field, whether or not it has a value."""
        aliases = {alias.lower() for alias in cls.COLUMN_ALIASES.get(field_name, [field_name])}

        for col in row.index.tolist():
            if str(col).strip().lower() in aliases:
                return col

        return None

    @classmethod
    def find_column(cls, row: pd.Series, field_name: str) -> str | None:
        """Find the column for a field if it has a value in this row."""
        col = cls.find_column_by_name(row, field_name)
        if col is not None and pd.notna(row[col]):
            return col
        return None

    @classmethod
    def get_value(cls, row: pd.Series, field_name: str, default: Any = None) -> Any:
        """Get value for a field from the row, or default if absent or empty."""
        col = cls.find_column(row, field_name)
        if col is not None:
            return row[col]
        return default


class CardRowExtractor:
    """Extracts card states from sheet rows.

    Attributes:
        column_mapper: ColumnMapper instance
        photo_dir: Directory relative photo paths are resolved against
        debug: Enable debug logging

    Example:
        >>> extractor = CardRowExtractor(photo_dir=Path("march/"))
        >>> state = extractor.extract_row(row, 0, "birthday")
    """

    TEXT_FIELDS = ("name", "designation", "department", "quote", "year", "suffix", "doj", "date", "month")
    INT_FIELDS = ("brightness", "contrast", "saturation", "offset_x", "offset_y")
    FLOAT_FIELDS = ("rotation", "zoom")

    def __init__(
        self,
        column_mapper: ColumnMapper | None = None,
        photo_dir: str | Path | None = None,
        debug: bool = False,
    ):
        """Initialize the extractor.

        Args:
            column_mapper: Column mapper (creates default if None)
            photo_dir: Base directory for relative photo paths (cwd if None)
            debug: Enable debug output
        """
        self.column_mapper = column_mapper or ColumnMapper()
        self.photo_dir = Path(photo_dir) if photo_dir else Path.cwd()
        self.debug = debug

    def extract_row(self, row: pd.Series, row_index: int | None, template: str) -> CardState:
        """Build the card state for one row.

        Args:
            row: Pandas Series representing a row
            row_index: Row position for error messages
            template: Template key of the batch

        Returns:
            CardState for the row

        Raises:
            InvalidSheetDataError: If the name is missing, a number cannot be
                parsed or the photo cannot be loaded
        """
        if self.debug:
            logger.debug(f"Processing row {row_index}: {dict(row)}")

        if self.column_mapper.find_column_by_name(row, "name") is None:
            available_cols = ", ".join(f"'{col}'" for col in row.index.tolist())
            raise InvalidSheetDataError(
                f"Missing required column 'Name'. Available columns: {available_cols}",
                row_index=row_index,
            )

        state = CardState(template=template)

        for field_name in self.TEXT_FIELDS:
            value = self._get_string_field(row, field_name)
            if value is not None:
                setattr(state, field_name, value)

        if not state.name:
            raise InvalidSheetDataError("Required field is empty", row_index=row_index, column_name="Name")

        for field_name in self.INT_FIELDS:
            value = self._get_number_field(row, field_name, row_index)
            if value is not None:
                setattr(state, field_name, int(value))

        for field_name in self.FLOAT_FIELDS:
            value = self._get_number_field(row, field_name, row_index)
            if value is not None:
                setattr(state, field_name, value)

        photo = self._get_string_field(row, "photo")
        if photo:
            state.user_image = self._load_photo(row, photo, row_index)

        if self.debug:
            logger.debug(f"Extracted row state: {state}")

        return state

    def _get_string_field(self, row: pd.Series, field_name: str) -> str | None:
        value = self.column_mapper.get_value(row, field_name)
        if value is None:
            return None
        return str(value).strip()

    def _get_number_field(self, row: pd.Series, field_name: str, row_index: int | None) -> float | None:
        """Parse an optional numeric field.

        Raises:
            InvalidSheetDataError: If the cell holds something that is not a finite number
        """
        value = self._get_string_field(row, field_name)
        if not value:
            return None

        try:
            number = float(value)
        except ValueError as e:
            raise InvalidSheetDataError(
                f"Cannot parse '{value}' as a number",
                row_index=row_index,
                column_name=self.column_mapper.find_column_by_name(row, field_name),
            ) from e

        if not math.isfinite(number):
            raise InvalidSheetDataError(
                f"'{value}' is not a finite number",
                row_index=row_index,
                column_name=self.column_mapper.find_column_by_name(row, field_name),
            )

        return number

    def _load_photo(self, row: pd.Series, photo: str, row_index: int | None) -> Image.Image:
        """Read and decode the row's photo file."""
        path = Path(photo).expanduser()
        if not path.is_absolute():
            path = self.photo_dir / path

        try:
            return decode_image(path.read_bytes(), source=str(path))
        except (OSError, ImageDecodeError) as e:
            raise InvalidSheetDataError(
                f"Cannot load photo: {e}",
                row_index=row_index,
                column_name=self.column_mapper.find_column_by_name(row, "photo"),
            ) from e
