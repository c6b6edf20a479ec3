"""Logging setup for the progbar command line."""
from __future__ import annotations

import sys
from typing import Optional, TextIO

from loguru import logger

from .config import LOG_LEVEL

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"


def configure_logging(level: str = LOG_LEVEL, sink: Optional[TextIO] = None) -> int:
    """Route log records to a single stream sink.

    Logs go to stderr by default so they never land inside a bar drawn
    on stdout. Returns the loguru handler id.
    """
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=False,
        backtrace=False,
        diagnose=False,
    )
