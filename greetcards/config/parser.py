"""Command-line argument parser for the greeting card generator.

This module converts command-line arguments into a RenderConfig for the
run and a CardState for the card being made.
"""

import argparse
from typing import Any

from greetcards.config.models import RenderConfig
from greetcards.config.templates import TEMPLATES
from greetcards.data.models import CardState
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

# CLI option -> CardState field, for options that default to "not given"
_TEXT_OPTIONS = ("name", "designation", "department", "quote", "year", "suffix", "doj", "date", "month")
_ADJUSTMENT_OPTIONS = ("brightness", "contrast", "saturation", "rotation", "zoom", "offset_x", "offset_y")


class ConfigParser:
    """Parser for command-line arguments.

    Example:
        >>> parser = ConfigParser()
        >>> config, state, extra = parser.parse_args(["birthday", "out/", "--name", "Ana"])
    """

    def __init__(self) -> None:
        """Initialize the argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            description="Generate 1080x1080 greeting card images (work anniversary or birthday).",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog(),
        )

        parser.add_argument("template", choices=sorted(TEMPLATES), help="Card design")
        parser.add_argument("output_dir", help="Directory to save generated cards")

        parser.add_argument(
            "--config",
            type=str,
            help="Load settings from JSON configuration file",
        )
        parser.add_argument(
            "--assets-dir",
            type=str,
            default=None,
            help="Directory with backgrounds, logo and fonts/ (default: bundled assets)",
        )

        # Card text
        text_group = parser.add_argument_group("Card Text")
        text_group.add_argument("--name", default=None, help="Person's name (also used in the file name)")
        text_group.add_argument("--designation", default=None, help="Job title")
        text_group.add_argument("--department", default=None, help="Department")
        text_group.add_argument("--quote", default=None, help="Message, word-wrapped on the card")
        text_group.add_argument("--year", default=None, help="Anniversary: number of years (default: 1)")
        text_group.add_argument("--suffix", default=None, help="Anniversary: ordinal suffix (default: st)")
        text_group.add_argument("--doj", default=None, help="Anniversary: date of joining")
        text_group.add_argument("--date", default=None, help="Birthday: day shown on the badge (default: 01)")
        text_group.add_argument("--month", default=None, help="Birthday: month shown on the badge (default: JAN)")

        # Photo
        photo_group = parser.add_argument_group("Photo")
        photo_group.add_argument("--photo", type=str, default=None, help="Path to the person's photo")
        photo_group.add_argument(
            "--brightness", type=int, default=None, help="Brightness -50 to 50 (default: 0)"
        )
        photo_group.add_argument(
            "--contrast", type=int, default=None, help="Contrast 0 to 200 percent (default: 100)"
        )
        photo_group.add_argument(
            "--saturation", type=int, default=None, help="Saturation 0 to 200 percent (default: 100)"
        )
        photo_group.add_argument(
            "--rotation", type=float, default=None, help="Clockwise rotation in degrees (default: 0)"
        )
        photo_group.add_argument(
            "--zoom", type=float, default=None, help="Zoom factor, 1 = fill the frame (default: 1)"
        )
        photo_group.add_argument(
            "--offset-x", type=int, default=None, help="Pan right in photo pixels (negative = left)"
        )
        photo_group.add_argument(
            "--offset-y", type=int, default=None, help="Pan down in photo pixels (negative = up)"
        )

        # Batch
        batch_group = parser.add_argument_group("Batch Mode")
        batch_group.add_argument(
            "--input-file",
            type=str,
            default=None,
            help="CSV or Excel file with one card per row (card text options are ignored)",
        )

        # Output settings
        output_group = parser.add_argument_group("Output Settings")
        output_group.add_argument(
            "--compress-level",
            type=int,
            default=None,
            choices=range(10),
            metavar="0-9",
            help="PNG compression level (default: 6)",
        )
        output_group.add_argument(
            "--skip-existing",
            action="store_true",
            help="Skip cards whose output file already exists",
        )

        # Modes and logging
        mode_group = parser.add_argument_group("Modes and Logging")
        mode_group.add_argument(
            "--debug",
            action="store_true",
            help="Show detailed debug information",
        )
        mode_group.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging output",
        )
        mode_group.add_argument(
            "--quiet",
            action="store_true",
            help="Minimize logging output",
        )
        mode_group.add_argument(
            "--log-file",
            type=str,
            default=None,
            help="Write log output to file",
        )

        return parser

    def _get_epilog(self) -> str:
        """Get epilog text for help message.

        Returns:
            Epilog text
        """
        return """
Batch CSV/Excel format:
  One card per row. Columns are matched by name (case-insensitive):
    Name, Designation, Department, Quote, Photo
    Anniversary: Year, Suffix, DOJ
    Birthday:    Date, Month
    Optional:    Brightness, Contrast, Saturation, Rotation, Zoom,
                 Offset X, Offset Y

Examples:
  Single anniversary card:
    python make_greeting_card.py anniversary cards/ --name "Jane Doe" \\
      --designation "Senior Engineer" --department "Platform" \\
      --year 5 --suffix th --doj 2020-03-01 --photo jane.jpg

  Birthday card with photo adjustments:
    python make_greeting_card.py birthday cards/ --name "Ana Lima" \\
      --date 14 --month MAR --photo ana.jpg --zoom 1.4 --brightness 10

  Batch from a spreadsheet:
    python make_greeting_card.py birthday cards/ --input-file march.xlsx
"""

    def parse_args(
        self, args: list[str] | None = None
    ) -> tuple[RenderConfig, CardState, dict[str, Any]]:
        """Parse command-line arguments.

        Args:
            args: Arguments to parse (None = use sys.argv)

        Returns:
            Tuple of (config, state, extra_args) where extra_args contains
            output_dir, input_file and photo
        """
        parsed = self.parser.parse_args(args)

        if parsed.config:
            logger.info(f"Loading configuration from {parsed.config}")
            config = RenderConfig.from_json(parsed.config)
        else:
            config = RenderConfig()

        self._apply_args_to_config(config, parsed)
        state = self._build_state(config, parsed)

        extra_args = {
            "output_dir": parsed.output_dir,
            "input_file": parsed.input_file,
            "photo": parsed.photo,
        }

        return config, state, extra_args

    def _apply_args_to_config(self, config: RenderConfig, args: argparse.Namespace) -> None:
        """Apply parsed arguments to configuration object.

        Args:
            config: Configuration to modify
            args: Parsed arguments
        """
        config.template = args.template

        if args.assets_dir is not None:
            config.assets_dir = args.assets_dir

        # Logging
        if args.quiet:
            config.log_level = "WARNING"
        elif args.verbose or args.debug:
            config.log_level = "DEBUG"

        config.debug = config.debug or args.debug
        if args.log_file is not None:
            config.log_file = args.log_file

        # Output configuration
        if args.compress_level is not None:
            config.output.compress_level = args.compress_level
        config.output.skip_existing = config.output.skip_existing or args.skip_existing

    def _build_state(self, config: RenderConfig, args: argparse.Namespace) -> CardState:
        """Create the card state from the options that were given."""
        state = CardState(template=config.template)

        given = {
            option: getattr(args, option)
            for option in _TEXT_OPTIONS + _ADJUSTMENT_OPTIONS
            if getattr(args, option) is not None
        }
        state.update(**given)

        return state
