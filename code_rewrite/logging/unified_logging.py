"""
Unified log format with importance (0-10) for code_rewrite log output.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from typing import Optional

# Importance (0-10) per standard level when a record does not set one via extra
LEVEL_TO_IMPORTANCE = {
    "DEBUG": 2,
    "INFO": 4,
    "WARNING": 6,
    "ERROR": 8,
    "CRITICAL": 10,
}

UNIFIED_DATE_FMT = "%Y-%m-%d %H:%M:%S"
UNIFIED_FORMAT_STR = "%(asctime)s | %(levelname)-8s | %(importance)s | %(name)s | %(message)s"

PACKAGE_LOGGER_NAME = "code_rewrite"


def importance_from_level(level_name: str) -> int:
    """Return importance 0-10 for a standard log level name. Returns 4 for unknown."""
    return LEVEL_TO_IMPORTANCE.get((level_name or "").strip().upper(), 4)


class UnifiedFormatter(logging.Formatter):
    """
    Formatter that outputs: timestamp | level | importance | logger | message.

    Importance comes from record.importance (set through `extra`) or from level.
    """

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "importance", None) is None:
            record.importance = importance_from_level(record.levelname)
        return super().format(record)


def create_unified_formatter(
    fmt: str = UNIFIED_FORMAT_STR,
    datefmt: str = UNIFIED_DATE_FMT,
) -> UnifiedFormatter:
    """Create a UnifiedFormatter with project default format and date format."""
    return UnifiedFormatter(fmt=fmt, datefmt=datefmt)


def configure_logging(
    level: str = "WARNING", handler: Optional[logging.Handler] = None
) -> logging.Logger:
    """
    Set the package logger level and attach one unified handler.

    Repeated calls only change the level unless a new handler is given.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level.upper())

    if handler is not None:
        for existing in list(package_logger.handlers):
            if getattr(existing, "_code_rewrite_unified", False):
                package_logger.removeHandler(existing)
    elif any(getattr(h, "_code_rewrite_unified", False) for h in package_logger.handlers):
        return package_logger

    new_handler = handler or logging.StreamHandler()
    new_handler.setFormatter(create_unified_formatter())
    new_handler._code_rewrite_unified = True
    package_logger.addHandler(new_handler)
    return package_logger
