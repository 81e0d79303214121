"""Logging for the codepoet backend.

Everything logs under the ``codepoet`` logger: module loggers created with
``logging.getLogger(__name__)`` inside the package propagate to it. Output
goes to stdout and, outside tests, to a size-rotated file.

Environment:
    LOG_LEVEL      level for codepoet loggers (DEBUG locally, INFO when deployed)
    LOG_FILE       rotating log file path, empty to disable
    LOG_LIBRARIES  level for chatty client libraries (default WARNING)
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from codepoet.utils.environment import is_debug, is_test

LOGGER_NAME = "codepoet"
DEFAULT_LOG_FILE = "logs/codepoet.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# httpx logs every Gemini/GitHub request at INFO; firebase-admin pulls in google-auth
LIBRARY_LOGGERS = ("httpx", "httpcore", "google.auth", "urllib3", "aiosqlite")


def _level(value: str | None, default: int) -> int:
    if not value:
        return default
    return getattr(logging, value.upper(), default)


def _file_handler(path: str, formatter: logging.Formatter) -> RotatingFileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    return handler


def quiet_libraries(level: int | None = None) -> None:
    """Cap the level of third-party client loggers."""
    if level is None:
        level = _level(os.getenv("LOG_LIBRARIES"), logging.WARNING)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: str | None = None,
    log_level: str | None = None,
) -> logging.Logger:
    """Configure and return the application logger.

    Calling it again returns the already configured logger untouched apart
    from its level.
    """
    default_level = logging.DEBUG if is_debug() else logging.INFO
    level = _level(log_level or os.getenv("LOG_LEVEL"), default_level)

    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:
        return log

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    log.addHandler(console)

    if log_file is None:
        log_file = os.getenv("LOG_FILE", "" if is_test() else DEFAULT_LOG_FILE)
    if log_file:
        try:
            log.addHandler(_file_handler(log_file, formatter))
        except OSError as e:
            log.warning(f"Logging to stdout only, cannot open {log_file}: {e}")

    log.propagate = False
    quiet_libraries()
    return log


logger = setup_logger()


def get_logger(name: str) -> logging.Logger:
    """Return ``codepoet.<name>``, e.g. ``get_logger("performance")``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
