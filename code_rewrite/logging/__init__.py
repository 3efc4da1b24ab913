"""
Unified logging package: format with importance (0-10) for code_rewrite output.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from code_rewrite.logging.unified_logging import (
    LEVEL_TO_IMPORTANCE,
    PACKAGE_LOGGER_NAME,
    UNIFIED_DATE_FMT,
    UNIFIED_FORMAT_STR,
    UnifiedFormatter,
    configure_logging,
    create_unified_formatter,
    importance_from_level,
)

__all__ = [
    "LEVEL_TO_IMPORTANCE",
    "PACKAGE_LOGGER_NAME",
    "UNIFIED_DATE_FMT",
    "UNIFIED_FORMAT_STR",
    "UnifiedFormatter",
    "configure_logging",
    "create_unified_formatter",
    "importance_from_level",
]
