"""Define utility functions to simplify logging to the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("robot_motion")
console = Console()


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route the package's log records through a rich handler at the given level."""
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False, rich_tracebacks=True))
    logger.setLevel(level)


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    logger.info(message)
