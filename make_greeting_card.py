#!/usr/bin/env python3
"""
Greeting Card Generator - CLI

Renders 1080x1080 PNG greeting cards (work anniversary or birthday) with the
person's photo in a polaroid frame, their name, role and a message.

SINGLE CARD:
    python make_greeting_card.py anniversary cards/ --name "Jane Doe" \\
        --designation "Senior Engineer" --department Platform \\
        --year 5 --suffix th --doj 2020-03-01 --photo jane.jpg

BATCH (one card per row of a CSV/Excel file):
    python make_greeting_card.py birthday cards/ --input-file march.xlsx

Columns: Name (required), Designation, Department, Quote, Photo,
Year, Suffix, DOJ (anniversary), Date, Month (birthday), and the optional
photo adjustments Brightness, Contrast, Saturation, Rotation, Zoom,
Offset X, Offset Y.

For full help:
    python make_greeting_card.py --help
"""

import sys
import traceback
from pathlib import Path

from greetcards.config.parser import ConfigParser
from greetcards.config.templates import get_template
from greetcards.config.validator import ConfigValidator, StateValidator
from greetcards.data.extractor import CardRowExtractor
from greetcards.data.loader import SheetLoader
from greetcards.io.exporter import CardExporter
from greetcards.rendering.generator import CardGenerator
from greetcards.rendering.session import CardSession
from greetcards.resources.assets import AssetLoader, decode_image
from greetcards.utils.exceptions import GreetCardsException
from greetcards.utils.logger import get_logger, setup_logging


def run_batch(config, input_file: str, output_dir: str) -> int:
    """Render one card per sheet row.

    Returns:
        Exit code (0 if every row succeeded, 1 otherwise)
    """
    logger = get_logger(__name__)
    template = get_template(config.template)

    data = SheetLoader().load(input_file)
    extractor = CardRowExtractor(photo_dir=Path(input_file).parent, debug=config.debug)

    assets = AssetLoader(config).load(template)
    generator = CardGenerator()
    exporter = CardExporter(config.output)

    logger.info(f"Generating {len(data)} {template.name} cards...")

    count_success = 0
    count_failed = 0

    for position, (_, row) in enumerate(data.iterrows()):
        try:
            state = extractor.extract_row(row, row_index=position, template=template.name)
            StateValidator.validate(state)

            image = generator.render(state, assets, template)

            filename = exporter.output_filename(template.file_prefix, state.name)
            output_path = exporter.save(image, output_dir, filename)

            print(f"✓ Generated: {output_path.name}")
            count_success += 1

        except GreetCardsException as e:
            logger.error(f"Failed to generate row {position + 1}: {e}")
            print(f"✗ Failed: Row {position + 1} - {e}")
            count_failed += 1

    print()
    print("=" * 80)
    print(f"Completed: {count_success} cards generated")
    if count_failed > 0:
        print(f"Warning: {count_failed} cards failed to generate")
        logger.warning(f"{count_failed} cards failed to generate")
    print(f"Output directory: {Path(output_dir).absolute()}")
    print("=" * 80)

    return 0 if count_failed == 0 else 1


def run_single(config, state, photo: str | None, output_dir: str) -> int:
    """Render and export a single card from the command-line fields.

    Returns:
        Exit code
    """
    if photo:
        state.user_image = decode_image(Path(photo).read_bytes(), source=photo)

    StateValidator.validate(state)

    session = CardSession(config, state)
    output_path = session.export(output_dir)

    print(f"✓ Generated: {output_path.name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Arguments (None = use sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    print("=" * 80)
    print("Greeting Card Generator".center(80))
    print("=" * 80)
    print()

    debug = False

    try:
        parser = ConfigParser()
        config, state, extra_args = parser.parse_args(argv)
        debug = config.debug

        setup_logging(level=config.log_level, log_file=config.log_file, verbose=config.debug)
        logger = get_logger(__name__)
        logger.info(f"Starting Greeting Card Generator - {config.template}")

        ConfigValidator.validate(config, extra_args["output_dir"], extra_args["input_file"])

        if extra_args["input_file"]:
            return run_batch(config, extra_args["input_file"], extra_args["output_dir"])

        return run_single(config, state, extra_args["photo"], extra_args["output_dir"])

    except GreetCardsException as e:
        print(f"\nError: {e}", file=sys.stderr)
        if debug:
            traceback.print_exc()
        return 1

    except OSError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
