"""Logging setup for the greetcards package.

All package loggers live under the ``greetcards`` namespace. Pillow's own
logger shares the same handlers, so image decoding problems end up in the
card log, but it is never allowed below INFO: at DEBUG Pillow reports every
PNG chunk it reads or writes, which buries the card pipeline's own output.
"""

import logging
import sys
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"

LOGGER_PREFIX: Final[str] = "greetcards"

# Third-party loggers routed to our handlers, with the lowest level each may use
LIBRARY_LOGGERS: Final[dict[str, int]] = {"PIL": logging.INFO}

_logging_configured = False


def _build_handlers(
    level: int,
    log_file: Path | str | None,
    console: bool,
    verbose: bool,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT, DATE_FORMAT) if verbose else logging.Formatter(CONSOLE_FORMAT)
        )
        handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)

    return handlers


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
    console: bool = True,
    verbose: bool = False,
) -> None:
    """Configure logging for the card generator.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file (always uses the detailed format)
        console: Whether to log to stdout
        verbose: If True, use the detailed format on the console too

    Example:
        >>> setup_logging(level="DEBUG", log_file="cards.log")
        >>> get_logger(__name__).debug("Polaroid drawn")
    """
    global _logging_configured

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    handlers = _build_handlers(level, log_file, console, verbose)

    targets = {LOGGER_PREFIX: level}
    targets.update({name: max(level, floor) for name, floor in LIBRARY_LOGGERS.items()})

    for name, target_level in targets.items():
        target = logging.getLogger(name)
        if _logging_configured:
            for old in list(target.handlers):
                target.removeHandler(old)
                old.close()
        target.setLevel(target_level)
        for handler in handlers:
            target.addHandler(handler)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the greetcards namespace
    """
    if not _logging_configured:
        setup_logging()

    if name.startswith(LOGGER_PREFIX):
        logger_name = name
    else:
        logger_name = f"{LOGGER_PREFIX}.{name}"

    return logging.getLogger(logger_name)
