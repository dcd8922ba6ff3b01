# src/dbpool/__init__.py
"""
dbpool - Validated, immutable configuration for database connection pools.

A caller stages pool sizing, timeouts, validation and customization on a
ConnectionPoolConfigurationBuilder; build() returns a frozen
ConnectionPoolConfiguration that a pool engine is constructed from.
Invalid values are rejected by the setter that receives them.
"""

from importlib.metadata import PackageNotFoundError, version

from .configuration import (
    DEFAULT_INITIAL_SIZE,
    DEFAULT_MAX_IDLE_TIME,
    DEFAULT_MAX_SIZE,
    NO_TIMEOUT,
    ConnectionPoolConfiguration,
    ConnectionPoolConfigurationBuilder,
)
from .exceptions import (
    ConfigError,
    DBPoolError,
    InvalidConfigurationError,
)
from .protocols import (
    ConnectionFactory,
    Customizer,
    PoolBuilder,
    noop_customizer,
)
from .config import PoolSettings, load_pool_settings
from .config_validator import validate_pool_configuration

try:
    __version__ = version("dbpool")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = [
    # Core
    "ConnectionPoolConfiguration",
    "ConnectionPoolConfigurationBuilder",
    "NO_TIMEOUT",
    "DEFAULT_INITIAL_SIZE",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MAX_IDLE_TIME",

    # Collaborators
    "ConnectionFactory",
    "PoolBuilder",
    "Customizer",
    "noop_customizer",

    # Exceptions
    "DBPoolError",
    "ConfigError",
    "InvalidConfigurationError",

    # Settings and review
    "PoolSettings",
    "load_pool_settings",
    "validate_pool_configuration",

    "__version__",
]
