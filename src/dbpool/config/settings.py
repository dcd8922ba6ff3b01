# src/dbpool/config/settings.py
"""
Declarative pool settings.

This module defines a Pydantic model mirroring ConnectionPoolConfiguration
for applications that keep pool sizing and timeouts in a TOML file or in
environment variables instead of code.

Durations accept anything Pydantic parses as a ``timedelta``: a number of
seconds (``30``), ``"HH:MM:SS"`` or ISO 8601 (``"PT30M"``). Zero disables
the corresponding timeout, as on the builder.

Usage:
    >>> from dbpool.config import PoolSettings, load_pool_settings
    >>> settings = PoolSettings()  # All defaults
    >>> settings.max_size
    10

    >>> # Load from TOML ([pool] table) plus DBPOOL_POOL__* variables
    >>> settings = load_pool_settings(config_path=Path("config.toml"))
    >>> config = settings.to_configuration(factory)
"""

from __future__ import annotations

import logging
import os
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..configuration import (
    DEFAULT_INITIAL_SIZE,
    DEFAULT_MAX_IDLE_TIME,
    DEFAULT_MAX_SIZE,
    NO_TIMEOUT,
    ConnectionPoolConfiguration,
    ConnectionPoolConfigurationBuilder,
)
from ..exceptions import ConfigError, InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "DBPOOL_POOL__"

# Settings read verbatim from the environment, never coerced to numbers
STRING_SETTINGS = frozenset({"validation_query"})


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class PoolSettings(BaseModel):
    """
    Connection pool settings as loaded from configuration sources.

    Field constraints match the builder's, so a PoolSettings instance always
    converts into a configuration without errors.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    initial_size: int = Field(
        default=DEFAULT_INITIAL_SIZE, ge=0, description="Connections created at startup"
    )
    max_size: int = Field(
        default=DEFAULT_MAX_SIZE, ge=1, description="Maximum number of live connections"
    )
    max_idle_time: timedelta = Field(
        default=DEFAULT_MAX_IDLE_TIME, description="Idle eviction threshold (0 disables)"
    )
    max_create_connection_time: timedelta = Field(
        default=NO_TIMEOUT, description="Connection creation timeout (0 disables)"
    )
    max_acquire_time: timedelta = Field(
        default=NO_TIMEOUT, description="Acquire timeout, creation included (0 disables)"
    )
    validation_query: Optional[str] = Field(
        default=None, description="Query run before handing out a connection"
    )

    @field_validator("max_idle_time", "max_create_connection_time", "max_acquire_time")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < NO_TIMEOUT:
            raise ValueError("duration must not be negative")
        return value

    def to_builder(self, connection_factory: Any) -> ConnectionPoolConfigurationBuilder:
        """
        Create a builder for connection_factory with these settings applied.

        The returned builder can still be adjusted, e.g. to add a customizer.
        """
        builder = (
            ConnectionPoolConfiguration.builder(connection_factory)
            .initial_size(self.initial_size)
            .max_size(self.max_size)
            .max_idle_time(self.max_idle_time)
            .max_create_connection_time(self.max_create_connection_time)
            .max_acquire_time(self.max_acquire_time)
        )
        if self.validation_query is not None:
            builder.validation_query(self.validation_query)
        return builder

    def to_configuration(self, connection_factory: Any) -> ConnectionPoolConfiguration:
        """Build a configuration for connection_factory from these settings."""
        return self.to_builder(connection_factory).build()


# =============================================================================
# LOADING
# =============================================================================


def load_pool_settings(
    config_path: Optional[Path] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> PoolSettings:
    """
    Load pool settings from TOML file, dictionary and environment.

    Configuration is loaded and merged in order:
        1. Default values (from the Pydantic model)
        2. [pool] table of the TOML config file (if provided)
        3. "pool" entry of the config dictionary (if provided)
        4. Environment variables (DBPOOL_POOL__*)
        5. Runtime overrides (if provided)

    Args:
        config_path: Optional path to TOML config file
        config_dict: Optional full config dictionary
        overrides: Optional runtime overrides for the pool section
        env_prefix: Prefix of environment variables to read

    Returns:
        PoolSettings instance

    Raises:
        ConfigError: If the TOML file cannot be parsed or a pool section is not a table
        InvalidConfigurationError: If a merged value is invalid
    """
    merged_config: Dict[str, Any] = {}

    if config_path is not None:
        try:
            with open(config_path, "rb") as f:
                full_config = tomllib.load(f)
            file_section = full_config.get("pool", {})
            logger.debug(f"Loaded pool config from {config_path}")
        except FileNotFoundError:
            logger.warning(f"Config file not found: {config_path}")
        except (tomllib.TOMLDecodeError, OSError) as e:
            raise ConfigError(f"Failed to load pool config from {config_path}: {e}") from e
        else:
            merged_config = _deep_merge(
                merged_config, _require_section(file_section, f"[pool] in {config_path}")
            )

    if config_dict is not None:
        dict_section = _require_section(config_dict, "config_dict").get("pool", {})
        merged_config = _deep_merge(
            merged_config, _require_section(dict_section, "config_dict['pool']")
        )

    merged_config = _apply_env_overrides(merged_config, env_prefix)

    if overrides is not None:
        merged_config = _deep_merge(merged_config, _require_section(overrides, "overrides"))

    try:
        return PoolSettings(**merged_config)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        logger.error(f"Invalid pool configuration: {e}")
        raise InvalidConfigurationError(
            f"Invalid pool configuration: {field}: {first['msg']}",
            field=field,
            value=first.get("input"),
        ) from e


def _require_section(section: Any, source: str) -> Dict[str, Any]:
    """Return section if it is a table of settings, else raise ConfigError."""
    if not isinstance(section, dict):
        raise ConfigError(
            f"Pool settings in {source} must be a table, got {type(section).__name__}"
        )
    return section


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries recursively, override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    """
    Apply environment variable overrides.

    Environment variables follow the pattern:
        DBPOOL_POOL__<KEY>=value

    Examples:
        DBPOOL_POOL__MAX_SIZE=20
        DBPOOL_POOL__MAX_ACQUIRE_TIME=PT5S
    """
    result = config.copy()
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        setting = key[len(prefix):].lower()
        if not setting:
            continue
        if setting in STRING_SETTINGS:
            result[setting] = value
        else:
            result[setting] = _convert_env_value(value)
    return result


def _convert_env_value(value: str) -> Any:
    """Convert an environment variable string to int, float or str."""
    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


__all__ = [
    "PoolSettings",
    "load_pool_settings",
    "DEFAULT_ENV_PREFIX",
]
