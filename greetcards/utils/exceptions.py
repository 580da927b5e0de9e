"""Custom exception classes for the greetcards package.

This module defines a hierarchy of exceptions for different error conditions,
making it easier to handle and report errors with appropriate context.
"""


class GreetCardsException(Exception):
    """Base exception for all greetcards-related errors.

    All custom exceptions in the greetcards package inherit from this base
    class, making it easy to catch all greetcards-specific errors.
    """

    pass


class InvalidSheetDataError(GreetCardsException):
    """Raised when CSV/Excel batch data is malformed or invalid.

    Attributes:
        row_index: Optional row number where error occurred
        column_name: Optional column name where error occurred
    """

    def __init__(
        self,
        message: str,
        row_index: int | None = None,
        column_name: str | None = None,
    ) -> None:
        """Initialize with error details.

        Args:
            message: Description of the error
            row_index: Row number where error occurred (0-indexed)
            column_name: Column name where error occurred
        """
        self.row_index = row_index
        self.column_name = column_name

        error_parts = [message]
        if row_index is not None:
            error_parts.append(f"at row {row_index + 1}")
        if column_name:
            error_parts.append(f"in column '{column_name}'")

        super().__init__(" ".join(error_parts))


class AssetLoadError(GreetCardsException):
    """Raised when a static asset (background, logo) cannot be loaded.

    The asset loader never lets this escape: it is recorded on the
    corresponding AssetResult and the render falls back.

    Attributes:
        asset_name: Logical name of the asset ("background", "logo", ...)
        path: Path that was attempted
    """

    def __init__(
        self,
        message: str,
        asset_name: str | None = None,
        path: str | None = None,
    ) -> None:
        self.asset_name = asset_name
        self.path = path

        error_parts = [message]
        if asset_name:
            error_parts.append(f"for asset '{asset_name}'")
        if path:
            error_parts.append(f"(path: {path})")

        super().__init__(" ".join(error_parts))


class FontLoadError(GreetCardsException):
    """Raised when a font cannot be loaded.

    Attributes:
        font_spec: Font specification that failed to load
        attempted_paths: Paths that were attempted (if any)
    """

    def __init__(
        self,
        message: str,
        font_spec: str | None = None,
        attempted_paths: list[str] | None = None,
    ) -> None:
        """Initialize with font loading error details.

        Args:
            message: Description of the error
            font_spec: Font name or path that was requested
            attempted_paths: List of paths that were tried
        """
        self.font_spec = font_spec
        self.attempted_paths = attempted_paths or []

        error_parts = [message]
        if font_spec:
            error_parts.append(f"for font '{font_spec}'")
        if attempted_paths:
            paths_str = ", ".join(attempted_paths[:3])
            if len(attempted_paths) > 3:
                paths_str += f", and {len(attempted_paths) - 3} more"
            error_parts.append(f"(tried: {paths_str})")

        super().__init__(" ".join(error_parts))


class ColorParseError(GreetCardsException):
    """Raised when a color specification cannot be parsed.

    Attributes:
        color_spec: Color specification that failed to parse
        expected_format: Expected format (optional)
    """

    def __init__(
        self,
        message: str,
        color_spec: str | None = None,
        expected_format: str | None = None,
    ) -> None:
        self.color_spec = color_spec
        self.expected_format = expected_format

        error_parts = [message]
        if color_spec:
            error_parts.append(f"for color '{color_spec}'")
        if expected_format:
            error_parts.append(f"(expected format: {expected_format})")

        super().__init__(" ".join(error_parts))


class ImageDecodeError(GreetCardsException):
    """Raised when uploaded photo bytes cannot be decoded.

    Attributes:
        source: Where the bytes came from (file path or "upload")
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source

        error_parts = [message]
        if source:
            error_parts.append(f"from {source}")

        super().__init__(" ".join(error_parts))


class CardRenderError(GreetCardsException):
    """Raised when card rendering fails.

    Attributes:
        stage: Stage of the pipeline where error occurred
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: str | None = None,
    ) -> None:
        """Initialize with rendering error details.

        Args:
            message: Description of the error
            stage: Stage where error occurred (e.g., "polaroid", "captions")
            details: Additional technical details
        """
        self.stage = stage
        self.details = details

        error_parts = [message]
        if stage:
            error_parts.append(f"during {stage}")
        if details:
            error_parts.append(f"({details})")

        super().__init__(" ".join(error_parts))


class ExportError(GreetCardsException):
    """Raised when serializing or saving a card fails.

    Attributes:
        output_path: Path where save was attempted
        format: Image format that was requested
    """

    def __init__(
        self,
        message: str,
        output_path: str | None = None,
        format: str | None = None,
    ) -> None:
        self.output_path = output_path
        self.format = format

        error_parts = [message]
        if output_path:
            error_parts.append(f"at path '{output_path}'")
        if format:
            error_parts.append(f"(format: {format})")

        super().__init__(" ".join(error_parts))


class ConfigurationError(GreetCardsException):
    """Raised when configuration or card state is invalid.

    Attributes:
        config_key: Configuration key that has an issue
        invalid_value: The invalid value (if applicable)
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        invalid_value: object = None,
    ) -> None:
        self.config_key = config_key
        self.invalid_value = invalid_value

        error_parts = [message]
        if config_key:
            error_parts.append(f"for setting '{config_key}'")
        if invalid_value is not None:
            error_parts.append(f"(value: {invalid_value!r})")

        super().__init__(" ".join(error_parts))
