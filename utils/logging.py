"""Logging setup shared by the library modules and the CLI."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from config.settings import settings

# Pages are classified on worker threads, so the thread name is part of every line.
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"

logger = logging.getLogger("doccompare")


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn ``"debug"``, ``"INFO"``, ``10`` or ``None`` (the LOG_LEVEL setting) into a level number."""
    if level is None:
        level = settings.log_level
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_logging(level: Union[int, str, None] = None, logfile: Optional[str] = None) -> int:
    """
    Send ``doccompare`` records to stdout (and ``logfile`` when given).

    Only the package logger is configured, so the host application's root
    logger is left alone. Calling it again replaces the previous handlers.

    Returns:
        The level that was applied
    """
    resolved = resolve_level(level)
    formatter = logging.Formatter(_LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(resolved)
    logger.propagate = False
    return resolved
