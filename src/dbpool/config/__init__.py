# src/dbpool/config/__init__.py
"""
Declarative settings for connection pools.

Settings are merged from model defaults, the [pool] table of a TOML file,
a config dictionary, DBPOOL_POOL__* environment variables and runtime
overrides, then turned into a builder or a configuration.
"""

from .settings import DEFAULT_ENV_PREFIX, PoolSettings, load_pool_settings

__all__ = [
    "PoolSettings",
    "load_pool_settings",
    "DEFAULT_ENV_PREFIX",
]
