"""Logging setup for the Canhão Podcast CLI."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "canhao"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    level: str = "WARNING",
) -> logging.Logger:
    """Configure the package logger.

    Console output goes to stderr through rich so it never mixes with
    command output (e.g. ``list --json``).

    Args:
        verbose: Force DEBUG level
        log_file: Optional file that receives the same records as plain text
        level: Level name used when not verbose

    Returns:
        The configured ``canhao`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level.upper())

    # Re-running setup (tests, repeated CLI invocations) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
