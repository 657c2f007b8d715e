"""Logging utilities for killtree."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "KILLTREE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: str | None) -> str:
    """Normalize a level name; unknown or missing names fall back to WARNING."""
    if level is None:
        return DEFAULT_LOG_LEVEL
    level = level.strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name with some formatting configs."""
    # No need to reconfigure the logger if it was already created
    if name in logging.Logger.manager.loggerDict:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(os.environ.get(LOG_LEVEL_ENV)))
    formatter = logging.Formatter("%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def set_level(level: str) -> None:
    """Set the level of every killtree logger created so far and of those created later."""
    level = resolve_level(level)
    os.environ[LOG_LEVEL_ENV] = level
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("killtree") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
