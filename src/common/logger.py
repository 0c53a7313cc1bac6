"""Rich-backed logging for repo-chat.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Listing repository root...")
    logger.warning("Skipping unreadable file")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# One console for every handler created here
console = Console()


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a logger that writes through rich.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level name. If None, uses LOG_LEVEL or INFO.
        show_time: Include a timestamp column
        show_path: Include the emitting file and line

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Configured already: don't stack a second handler
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # pytest's caplog hooks the root logger
    logger.propagate = True

    return logger

