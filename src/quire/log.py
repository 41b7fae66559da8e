# src/quire/log.py
"""Logging setup for the Quire command-line application.

Library modules only create loggers with logging.getLogger(__name__);
handlers are installed here, by the application.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "quire"


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Route the quire logger through a Rich handler.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level for the quire logger.
        console: Console to render to (stderr by default).
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
