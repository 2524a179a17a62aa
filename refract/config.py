"""
Configuration for the refract trace translator.

Uses Pydantic for validation and environment variable loading.

Configuration Priority (highest to lowest):
    1. Programmatic configuration via configure()
    2. Environment variables
    3. Default values

Environment Variables:
    REFRACT_LOG_LEVEL: Logging verbosity (default: WARNING)
    REFRACT_METRICS_ENABLED: Record prometheus metrics (default: true)
    REFRACT_MAX_BODY_BYTES: Max raw body size read from a stream, 0 = unlimited (default: 0)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "TranslatorConfig",
    "get_config",
    "configure",
    "reset_config",
]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TranslatorConfig(BaseModel):
    """
    Configuration for the translator.

    Attributes:
        log_level: Level applied to the ``refract`` logger.
        metrics_enabled: Whether translation metrics are recorded.
        max_body_bytes: Upper bound on the raw body read from a stream.
            Zero disables the limit.
    """
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the refract logger"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Enable/disable prometheus metrics"
    )
    max_body_bytes: int = Field(
        default=0,
        ge=0,
        description="Maximum raw body size in bytes (0 = unlimited)"
    )

    class Config:
        """Pydantic configuration."""
        frozen = True

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Load configuration from environment variables.

        Returns:
            TranslatorConfig instance with values from environment
        """
        def _parse_bool(val: Optional[str], default: bool) -> bool:
            if val is None:
                return default
            return val.lower() in ("true", "1", "yes")

        return cls(
            log_level=os.getenv("REFRACT_LOG_LEVEL", "WARNING"),
            metrics_enabled=_parse_bool(os.getenv("REFRACT_METRICS_ENABLED"), True),
            max_body_bytes=int(os.getenv("REFRACT_MAX_BODY_BYTES", "0")),
        )


# Global configuration instance
_config: Optional[TranslatorConfig] = None


def get_config() -> TranslatorConfig:
    """
    Get the current configuration.

    If not explicitly configured, loads from environment variables.
    """
    global _config
    if _config is None:
        _config = TranslatorConfig.from_env()
        logging.getLogger("refract").setLevel(_config.log_level)
    return _config


def configure(
    *,
    log_level: Optional[str] = None,
    metrics_enabled: Optional[bool] = None,
    max_body_bytes: Optional[int] = None,
) -> TranslatorConfig:
    """
    Configure refract programmatically.

    Unspecified values keep their current (or environment) setting.

    Example:
        >>> from refract import configure
        >>> configure(metrics_enabled=False, max_body_bytes=8 * 1024 * 1024)
    """
    global _config

    overrides = {}
    if log_level is not None:
        overrides["log_level"] = log_level
    if metrics_enabled is not None:
        overrides["metrics_enabled"] = metrics_enabled
    if max_body_bytes is not None:
        overrides["max_body_bytes"] = max_body_bytes

    # model_copy(update=...) skips validation
    config = TranslatorConfig(**{**get_config().model_dump(), **overrides})
    logging.getLogger("refract").setLevel(config.log_level)

    _config = config
    return config


def reset_config() -> None:
    """
    Reset configuration to defaults.

    Primarily for testing purposes.
    """
    global _config
    _config = None
