"""
log.py

Responsibility: route releaser diagnostics to stderr.

stdout is reserved for values returned by commands (a version, a tag name), so
callers can capture them with `$(releaser ...)` while logs stay visible.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "releaser"
LOG_FORMAT = "releaser %(levelname)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
}

_handler: logging.Handler | None = None


def setup_logging(level: str = "info", stream: TextIO | None = None) -> logging.Logger:
    """
    Configure the `releaser` logger with a single stderr handler.

    Calling it again replaces the handler installed by the previous call.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_LEVELS.get(level, logging.INFO))
    _handler = handler
    return logger


def reset_logging() -> None:
    """Remove the handler installed by `setup_logging` and restore the default level."""
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
