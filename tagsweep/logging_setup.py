"""Route loguru to stderr so log lines never mix with the report."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}"


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
        colorize=None,
    )
