"""Configuration and card state validation.

Configuration problems that make a run impossible raise ConfigurationError.
Card state values outside the editing sliders' ranges are accepted (the
renderer copes with them) and only reported as warnings.
"""

from pathlib import Path

from greetcards.config.models import RenderConfig
from greetcards.config.templates import get_template
from greetcards.data.models import CardState
from greetcards.utils.constants import (
    BRIGHTNESS_RANGE,
    CONTRAST_RANGE,
    SATURATION_RANGE,
    ROTATION_RANGE,
    ZOOM_SLIDER_RANGE,
)
from greetcards.utils.exceptions import ConfigurationError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

_SLIDER_RANGES = {
    "brightness": BRIGHTNESS_RANGE,
    "contrast": CONTRAST_RANGE,
    "saturation": SATURATION_RANGE,
    "rotation": ROTATION_RANGE,
    "zoom": ZOOM_SLIDER_RANGE,
}

SHEET_EXTENSIONS = (".csv", ".xlsx", ".xls")


class ConfigValidator:
    """Validator for run configuration.

    Example:
        >>> ConfigValidator.validate(RenderConfig(template="birthday"), output_dir="cards/")
    """

    @classmethod
    def validate(
        cls,
        config: RenderConfig,
        output_dir: str | None = None,
        input_file: str | None = None,
    ) -> None:
        """Validate entire configuration.

        Args:
            config: Configuration to validate
            output_dir: Optional output directory to check (created if missing)
            input_file: Optional batch file to check

        Raises:
            ConfigurationError: If configuration is invalid
        """
        get_template(config.template)
        cls.validate_assets_dir(config)

        if output_dir:
            cls.validate_output_dir(output_dir)
        if input_file:
            cls.validate_input_file(input_file)

    @classmethod
    def validate_assets_dir(cls, config: RenderConfig) -> None:
        """Check the assets directory.

        A missing directory is not an error (every asset has a fallback),
        but a path that is not a directory is.

        Raises:
            ConfigurationError: If the path exists and is not a directory
        """
        path = Path(config.assets_dir)

        if path.exists() and not path.is_dir():
            raise ConfigurationError(
                f"Assets path is not a directory: {path}",
                config_key="assets_dir",
                invalid_value=config.assets_dir,
            )

        if not path.exists():
            logger.warning(f"Assets directory not found: {path}. Fallbacks will be used.")
            return

        logger.debug(f"Assets directory validated: {path}")

    @classmethod
    def validate_input_file(cls, input_file: str) -> None:
        """Validate input file exists and is readable.

        Args:
            input_file: Path to input file

        Raises:
            ConfigurationError: If input file is invalid
        """
        path = Path(input_file)

        if not path.is_file():
            raise ConfigurationError(
                f"Input file does not exist: {input_file}",
                config_key="input_file",
                invalid_value=input_file,
            )

        if path.suffix.lower() not in SHEET_EXTENSIONS:
            logger.warning(
                f"Input file has unusual extension: {path.suffix}. "
                f"Expected one of {SHEET_EXTENSIONS}"
            )

        logger.debug(f"Input file validated: {input_file}")

    @classmethod
    def validate_output_dir(cls, output_dir: str, create: bool = True) -> None:
        """Validate output directory exists or can be created.

        Args:
            output_dir: Path to output directory
            create: If True, create directory if it doesn't exist

        Raises:
            ConfigurationError: If output directory is invalid
        """
        path = Path(output_dir)

        if path.exists() and not path.is_dir():
            raise ConfigurationError(
                f"Output path exists but is not a directory: {output_dir}",
                config_key="output_dir",
                invalid_value=output_dir,
            )

        if not path.exists():
            if not create:
                raise ConfigurationError(
                    f"Output directory does not exist: {output_dir}",
                    config_key="output_dir",
                    invalid_value=output_dir,
                )
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot create output directory: {e}",
                    config_key="output_dir",
                    invalid_value=output_dir,
                ) from e
            logger.info(f"Created output directory: {output_dir}")

        logger.debug(f"Output directory validated: {output_dir}")


class StateValidator:
    """Reports card state values the editing form would not allow."""

    @classmethod
    def validate(cls, state: CardState) -> list[str]:
        """Check adjustments against the slider ranges.

        Args:
            state: Card state to check

        Returns:
            Warning messages (empty if everything is in range)
        """
        warnings = []

        for name, (low, high) in _SLIDER_RANGES.items():
            value = getattr(state, name)
            if not low <= value <= high:
                warnings.append(f"{name} {value} is outside {low}..{high}")

        if not state.name.strip():
            warnings.append("name is empty")

        for message in warnings:
            logger.warning(f"Card state: {message}")

        return warnings
