"""Logging setup for catalogdb.

Every module logs through a child of the ``catalogdb`` logger (for example
``catalogdb.database``). The package itself never installs handlers on
import; the entry point calls setup_logging() once, and embedding
applications may call it or attach their own handlers instead.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from catalogdb.config import config

__all__ = ["logger", "parse_level", "setup_logging"]

logger = logging.getLogger("catalogdb")

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def parse_level(level: int | str) -> int:
    """Converts a level name such as "debug" or "WARNING" to its number.

    Raises:
        ValueError: If the name is not a logging level.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _has_file_handler(log_file: Path) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target for handler in logger.handlers
    )


def setup_logging(level: int | str | None = None, log_file: Path | None = None) -> None:
    """Configure the package logger.

    Repeated calls adjust the level of the logger and its console handler.
    A file handler is added at most once per file.

    Args:
        level: Level number or name; defaults to ``config.LOG_LEVEL``.
        log_file: Extra log file (always at DEBUG); defaults to
            ``config.LOG_FILE``.
    """
    resolved = parse_level(config.LOG_LEVEL if level is None else level)
    if log_file is None:
        log_file = config.LOG_FILE

    logger.setLevel(resolved)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = [
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
    ]
    if console:
        for handler in console:
            handler.setLevel(resolved)
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None and not _has_file_handler(log_file):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
