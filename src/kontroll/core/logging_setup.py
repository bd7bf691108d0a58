"""Logging setup: stdlib `logging` rendered by rich on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "kontroll"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single `RichHandler` to the package logger.

    Calling it again only updates the level. stdout is left untouched so
    command output stays machine-readable.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
