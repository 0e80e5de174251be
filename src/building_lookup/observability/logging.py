"""Shared logging utilities for the lookup engine and its adapters.

Usage example:
    from building_lookup.observability.logging import get_logger

    logger = get_logger("building_lookup.directory")
    logger.info("Loaded %s rows", row_count)
"""

from __future__ import annotations

import logging
import time

_ROOT_NAME = "building_lookup"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def get_logger(name: str, *, level: int = logging.INFO) -> logging.Logger:
    """Return a logger writing UTC-stamped lines to stderr.

    Args:
        name: Logger name (use a stable module-qualified name).
        level: Level applied the first time the logger is configured.

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger


def set_verbosity(level: int) -> None:
    """Apply `level` to every already-configured building_lookup logger."""
    manager = logging.Logger.manager
    for name, candidate in list(manager.loggerDict.items()):
        if not isinstance(candidate, logging.Logger):
            continue
        if name == _ROOT_NAME or name.startswith(f"{_ROOT_NAME}."):
            candidate.setLevel(level)
