"""Excel and CSV file loading utilities.

This module loads batch spreadsheets (one card per row) with pandas. Every
cell is read as text so values such as "01" or "05" keep their leading
zeros.
"""

from pathlib import Path
from typing import Iterator

import pandas as pd

from greetcards.utils.exceptions import InvalidSheetDataError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


class SheetLoader:
    """Loads card rows from Excel or CSV files.

    Example:
        >>> loader = SheetLoader()
        >>> for index, row in loader.iter_rows("birthdays.xlsx"):
        ...     print(row["Name"])
    """

    def load(self, file_path: str | Path) -> pd.DataFrame:
        """Load data from CSV or Excel file.

        Args:
            file_path: Path to the file to load

        Returns:
            DataFrame with string cells (missing cells are NaN)

        Raises:
            InvalidSheetDataError: If file cannot be loaded or is empty
        """
        path = Path(file_path)

        logger.info(f"Loading data from {path}")

        suffix = path.suffix.lower()
        if suffix not in (".csv", ".xlsx", ".xls"):
            raise InvalidSheetDataError(
                f"Unsupported file format: {path.suffix}. "
                "Please use CSV or Excel files (.csv, .xlsx, .xls)."
            )

        try:
            if suffix == ".csv":
                data = pd.read_csv(path, dtype=str)
            else:
                data = pd.read_excel(path, dtype=str)
        except FileNotFoundError as e:
            raise InvalidSheetDataError(f"File not found: {path}") from e
        except PermissionError as e:
            raise InvalidSheetDataError(f"Permission denied reading file: {path}") from e
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise InvalidSheetDataError(f"Error loading file: {e}") from e

        if data.empty:
            raise InvalidSheetDataError(f"File is empty: {path}", row_index=0)

        data.columns = [str(column).strip() for column in data.columns]

        logger.info(f"Loaded {len(data)} rows with {len(data.columns)} columns from {path.name}")
        logger.debug(f"Columns: {list(data.columns)}")

        return data

    def iter_rows(self, file_path: str | Path) -> Iterator[tuple[int, pd.Series]]:
        """Iterate over (0-based position, row) pairs of a file.

        Raises:
            InvalidSheetDataError: If file cannot be loaded
        """
        data = self.load(file_path)

        for position, (_, row) in enumerate(data.iterrows()):
            yield position, row
