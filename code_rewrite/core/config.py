"""
Engine configuration.

Provides configuration schema, validation, loading and the process-wide
active configuration.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    BATCH_STRATEGIES,
    BATCH_STRATEGY_DESCENDING,
    DEFAULT_LANGUAGE,
    DEFAULT_LOG_LEVEL,
)
from .exceptions import ConfigurationError
from .languages import registered_languages

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Matching and rewrite engine configuration."""

    model_config = {"extra": "forbid"}  # Reject unknown fields

    default_language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language used by Root.parse when none is given",
    )
    batch_strategy: str = Field(
        default=BATCH_STRATEGY_DESCENDING,
        description="How batches of edits are applied: 'descending' or 'ascending'",
    )
    validate_templates: bool = Field(
        default=True,
        description="Require string templates passed to replace() to parse under the grammar",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Log level for code_rewrite loggers")

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate that the language is registered."""
        if v not in registered_languages():
            raise ValueError(
                f"Language must be one of {', '.join(registered_languages())}, got: {v}"
            )
        return v

    @field_validator("batch_strategy")
    @classmethod
    def validate_batch_strategy(cls, v: str) -> str:
        """Validate batch strategy value."""
        v_lower = v.lower()
        if v_lower not in BATCH_STRATEGIES:
            raise ValueError(f"Batch strategy must be 'descending' or 'ascending', got: {v}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate standard log level name."""
        v_upper = v.upper()
        if v_upper not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(_LOG_LEVELS)}, got: {v}")
        return v_upper


def validate_config(config_data: Dict[str, Any]) -> EngineConfig:
    """
    Validate an in-memory config dict.

    Raises:
        ConfigurationError: If any value is invalid
    """
    try:
        return EngineConfig(**config_data)
    except ValidationError as e:
        errors = e.errors()
        key = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_key=key, details={"errors": errors}
        ) from e


def load_config(config_path: Union[str, Path]) -> EngineConfig:
    """
    Load and validate a JSON configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        EngineConfig object

    Raises:
        ConfigurationError: If the file is missing, not JSON or invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be an object: {path}")
    return validate_config(data)


def save_config(config: EngineConfig, config_path: Union[str, Path]) -> None:
    """Write configuration to disk as JSON."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config.model_dump(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


_active: Optional[EngineConfig] = None
_active_lock = threading.Lock()


def get_config() -> EngineConfig:
    """Return the active configuration, creating defaults on first use."""
    global _active
    with _active_lock:
        if _active is None:
            _active = EngineConfig()
        return _active


def set_config(config: Optional[EngineConfig]) -> EngineConfig:
    """
    Replace the active configuration and apply its log level.

    Passing None restores defaults.
    """
    global _active
    from ..logging import configure_logging

    new_config = config or EngineConfig()
    with _active_lock:
        _active = new_config
    configure_logging(new_config.log_level)
    logger.debug(f"Active configuration: {new_config.model_dump()}")
    return new_config
