"""Loguru configuration for the hybrid architect."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

_configured_level: str | None = None


def setup_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a single stderr sink at ``level``.

    Calling again with the same level is a no-op.
    """
    global _configured_level

    if _configured_level == level:
        return
    _configured_level = level

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)
