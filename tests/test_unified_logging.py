"""
Tests for unified logging.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import io
import logging

from code_rewrite.logging import (
    PACKAGE_LOGGER_NAME,
    configure_logging,
    create_unified_formatter,
    importance_from_level,
)


def test_importance_from_level() -> None:
    assert importance_from_level("debug") == 2
    assert importance_from_level("WARNING") == 6
    assert importance_from_level("CRITICAL") == 10
    assert importance_from_level("nonsense") == 4


def test_formatter_uses_explicit_importance() -> None:
    record = logging.LogRecord("code_rewrite.x", logging.INFO, __file__, 1, "hello", None, None)
    record.importance = 9
    line = create_unified_formatter(datefmt="%H").format(record)
    assert line.endswith("| INFO     | 9 | code_rewrite.x | hello")


def test_configure_logging_emits_unified_lines() -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    logger = configure_logging("DEBUG", handler=handler)
    try:
        logging.getLogger("code_rewrite.core.edit").warning("edits rejected")
        output = stream.getvalue()
        assert "| WARNING  | 6 | code_rewrite.core.edit | edits rejected" in output
        assert logger.name == PACKAGE_LOGGER_NAME
        assert logger.level == logging.DEBUG
    finally:
        logger.removeHandler(handler)


def test_configure_logging_is_idempotent() -> None:
    configure_logging("INFO")
    configure_logging("INFO")
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    unified = [h for h in logger.handlers if getattr(h, "_code_rewrite_unified", False)]
    assert len(unified) == 1
