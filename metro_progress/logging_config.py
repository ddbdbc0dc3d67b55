"""Logging setup: rich console handler plus an optional rotating log file."""

import logging
import logging.handlers

from rich.console import Console
from rich.logging import RichHandler

from .config import LOG_FORMAT


def setup_logging(level: str = "WARNING", log_file: str | None = None, console: Console | None = None) -> None:
    """Configure the package logger. Calling it again is a no-op."""
    logger = logging.getLogger("metro_progress")
    if logger.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    # Log to stderr so records don't tear the live display
    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(numeric_level)
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
