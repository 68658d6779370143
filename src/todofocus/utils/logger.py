"""Application-wide logger writing to platformdirs user_log_dir.

The level defaults to DEBUG and can be lowered with ``TODOFOCUS_LOG_LEVEL``
(e.g. ``INFO``). Storage failures are logged at ERROR, notification failures
at WARNING and timer transitions at DEBUG.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_LOGGER = "todofocus"
LOG_LEVEL_ENV = "TODOFOCUS_LOG_LEVEL"
_LOG_FILE = "todofocus.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Location of the active log file."""
    return Path(user_log_dir(APP_LOGGER)) / _LOG_FILE


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the ``todofocus`` logger, attaching the file handler on first call.

    Module loggers (``logging.getLogger(__name__)``) are children of this
    logger and end up in the same file.
    """
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(_level_from_env())
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger
