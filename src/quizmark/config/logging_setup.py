"""Logging configuration: one stderr handler on the package logger."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the ``quizmark`` logger.

    Safe to call repeatedly; later calls only change the level. stderr keeps
    stdout free for the JSON-lines protocol and CLI output.
    """
    global _handler

    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger("quizmark")
    logger.setLevel(resolved)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    _handler.setLevel(resolved)
    return logger
