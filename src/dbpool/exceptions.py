# src/dbpool/exceptions.py
"""
Custom exceptions for the dbpool library.

This module defines the exception hierarchy raised while staging and
loading connection pool configuration, so that applications can handle
configuration mistakes separately from other failures.
"""

from typing import Any, Optional


class DBPoolError(Exception):
    """Base class for all dbpool specific errors."""
    def __init__(self, message: str = "An unspecified error occurred in dbpool."):
        super().__init__(message)

class ConfigError(DBPoolError):
    """Raised for errors related to configuration loading or validation."""
    def __init__(self, message: str = "Configuration error."):
        super().__init__(message)

class InvalidConfigurationError(ConfigError, ValueError):
    """
    Raised when an invalid argument is supplied while building a pool configuration.

    Raised immediately by the builder setter (or the builder entry point)
    that received the bad value, never later. Also a ValueError so callers
    guarding against bad arguments the usual way still catch it.
    """
    def __init__(
        self,
        message: str = "Invalid connection pool configuration.",
        field: Optional[str] = None,
        value: Any = None,
    ):
        self.field = field
        self.value = value
        super().__init__(message)
