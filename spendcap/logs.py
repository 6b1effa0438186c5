"""Logging setup: rich console handler on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s - %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route spendcap loggers through a RichHandler.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).

    Raises:
        ValueError: If the level is not a known level name.
    """
    if not isinstance(level, str):
        raise ValueError(f"Log level must be a level name, got {level!r}")
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("spendcap")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(numeric)
