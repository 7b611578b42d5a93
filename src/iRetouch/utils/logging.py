"""Package logger setup.

Records from every ``iRetouch.*`` module propagate to the package logger,
which owns the only stream handler.  The level defaults to INFO and can be
changed through :data:`~iRetouch.config.LOG_LEVEL_ENV`.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from ..config import LOG_FORMAT, LOG_LEVEL_ENV, PACKAGE_LOGGER_NAME

_PACKAGE_LOGGER: Optional[logging.Logger] = None


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
    # Unknown names come back as the string "Level <name>".
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or the child logger for module *name*.

    The package logger is configured on first use; later calls never add a
    second handler.
    """

    global _PACKAGE_LOGGER
    if _PACKAGE_LOGGER is None:
        _PACKAGE_LOGGER = logging.getLogger(PACKAGE_LOGGER_NAME)
        if not _PACKAGE_LOGGER.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            _PACKAGE_LOGGER.addHandler(handler)
        _PACKAGE_LOGGER.setLevel(_level_from_env())
    if name is None or name == PACKAGE_LOGGER_NAME:
        return _PACKAGE_LOGGER
    return _PACKAGE_LOGGER.getChild(name.removeprefix(PACKAGE_LOGGER_NAME + "."))
