# src/dbpool/configuration.py
"""
Connection pool configuration.

Provides the immutable value a pool engine is constructed from, and the
builder that stages and validates it.

Key Components:
- ConnectionPoolConfiguration: Frozen snapshot read by the pool engine
- ConnectionPoolConfigurationBuilder: Fluent, validating staging object

Timeout convention:
    A zero ``timedelta`` (``NO_TIMEOUT``) disables the corresponding
    behavior. ``max_idle_time=NO_TIMEOUT`` means connections are never
    evicted for idleness; ``max_create_connection_time=NO_TIMEOUT`` and
    ``max_acquire_time=NO_TIMEOUT`` mean no timeout is applied.

Usage:
    config = (ConnectionPoolConfiguration.builder(factory)
        .initial_size(2)
        .max_size(20)
        .max_acquire_time(timedelta(seconds=5))
        .validation_query("SELECT 1")
        .build())
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from .exceptions import InvalidConfigurationError
from .protocols import Customizer, noop_customizer

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

NO_TIMEOUT = timedelta(0)

DEFAULT_INITIAL_SIZE = 10
DEFAULT_MAX_SIZE = 10
DEFAULT_MAX_IDLE_TIME = timedelta(minutes=30)


# =============================================================================
# ARGUMENT CHECKS
# =============================================================================

def _require_factory(connection_factory: Any) -> Any:
    if connection_factory is None:
        raise InvalidConfigurationError(
            "ConnectionFactory must not be None", field="connection_factory"
        )
    return connection_factory


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a pool size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an int, got {type(value).__name__}",
            field=name,
            value=value,
        )
    return value


def _require_initial_size(initial_size: Any) -> int:
    _require_int("initial_size", initial_size)
    if initial_size < 0:
        raise InvalidConfigurationError(
            "Initial pool size must be equal or greater than zero",
            field="initial_size",
            value=initial_size,
        )
    return initial_size


def _require_max_size(max_size: Any) -> int:
    _require_int("max_size", max_size)
    if max_size < 1:
        raise InvalidConfigurationError(
            "Maximum pool size must be greater than zero",
            field="max_size",
            value=max_size,
        )
    return max_size


def _require_duration(name: str, value: Any) -> timedelta:
    if value is None:
        raise InvalidConfigurationError(f"{name} must not be None", field=name)
    if not isinstance(value, timedelta):
        raise InvalidConfigurationError(
            f"{name} must be a timedelta, got {type(value).__name__}",
            field=name,
            value=value,
        )
    if value < NO_TIMEOUT:
        raise InvalidConfigurationError(
            f"{name} must not be negative", field=name, value=value
        )
    return value


def _require_validation_query(validation_query: Any) -> str:
    if validation_query is None:
        raise InvalidConfigurationError(
            "ValidationQuery must not be None", field="validation_query"
        )
    if not isinstance(validation_query, str):
        raise InvalidConfigurationError(
            f"ValidationQuery must be a str, got {type(validation_query).__name__}",
            field="validation_query",
            value=validation_query,
        )
    return validation_query


def _require_customizer(customizer: Any) -> Customizer:
    if customizer is None:
        raise InvalidConfigurationError(
            "PoolBuilder customizer must not be None", field="customizer"
        )
    if not callable(customizer):
        raise InvalidConfigurationError(
            "PoolBuilder customizer must be callable",
            field="customizer",
            value=customizer,
        )
    return customizer


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class ConnectionPoolConfiguration:
    """
    Immutable connection pool configuration.

    Instances are produced by ConnectionPoolConfigurationBuilder.build() and
    are safe to share between threads without synchronization. Direct
    construction applies the same checks as the builder setters.

    Attributes:
        connection_factory: Factory the pool uses to create connections
        initial_size: Connections to create eagerly at startup (warm-up)
        max_size: Maximum number of live connections
        max_idle_time: Evict connections idle at least this long (0 disables)
        max_create_connection_time: Timeout for creating one connection (0 disables)
        max_acquire_time: Timeout for one acquire, including any connection
                          creation it triggers (0 disables)
        validation_query: Query run before handing out a connection, or None
        customizer: Called once by the pool engine with its pool builder
    """
    connection_factory: Any
    initial_size: int
    max_size: int
    max_idle_time: timedelta
    max_create_connection_time: timedelta
    max_acquire_time: timedelta
    validation_query: Optional[str]
    customizer: Customizer

    def __post_init__(self) -> None:
        _require_factory(self.connection_factory)
        _require_initial_size(self.initial_size)
        _require_max_size(self.max_size)
        _require_duration("max_idle_time", self.max_idle_time)
        _require_duration("max_create_connection_time", self.max_create_connection_time)
        _require_duration("max_acquire_time", self.max_acquire_time)
        if self.validation_query is not None:
            _require_validation_query(self.validation_query)
        _require_customizer(self.customizer)

    @staticmethod
    def builder(connection_factory: Any) -> "ConnectionPoolConfigurationBuilder":
        """
        Return a new builder for the given connection factory.

        Raises:
            InvalidConfigurationError: If connection_factory is None
        """
        return ConnectionPoolConfigurationBuilder.create(connection_factory)


# =============================================================================
# BUILDER
# =============================================================================

class ConnectionPoolConfigurationBuilder:
    """
    Builder for ConnectionPoolConfiguration instances.

    Every setter validates its argument immediately and returns the builder.
    The builder stays usable after build(); each build() snapshots the
    current state.

    This class is not thread-safe. Callers must not mutate one builder
    from several threads.
    """

    def __init__(self, connection_factory: Any):
        """
        Prefer create() or ConnectionPoolConfiguration.builder().

        Raises:
            InvalidConfigurationError: If connection_factory is None
        """
        self._connection_factory = _require_factory(connection_factory)
        self._initial_size = DEFAULT_INITIAL_SIZE
        self._max_size = DEFAULT_MAX_SIZE
        self._max_idle_time = DEFAULT_MAX_IDLE_TIME
        self._max_create_connection_time = NO_TIMEOUT
        self._max_acquire_time = NO_TIMEOUT
        self._validation_query: Optional[str] = None
        self._customizer: Customizer = noop_customizer

    @classmethod
    def create(cls, connection_factory: Any) -> "ConnectionPoolConfigurationBuilder":
        """
        Create a builder wrapping a connection factory.

        Args:
            connection_factory: Factory the pool will use, must not be None

        Raises:
            InvalidConfigurationError: If connection_factory is None
        """
        return cls(connection_factory)

    def initial_size(self, initial_size: int) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure the initial pool size. Defaults to 10.

        Args:
            initial_size: Connections to create at startup, must be >= 0

        Raises:
            InvalidConfigurationError: If initial_size is negative
        """
        self._initial_size = _require_initial_size(initial_size)
        return self

    def max_size(self, max_size: int) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure the maximum pool size. Defaults to 10.

        Args:
            max_size: Upper bound on live connections, must be >= 1

        Raises:
            InvalidConfigurationError: If max_size is zero or negative
        """
        self._max_size = _require_max_size(max_size)
        return self

    def max_idle_time(self, max_idle_time: timedelta) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure the idle timeout. Defaults to 30 minutes.

        Args:
            max_idle_time: Idle time after which a pooled connection is evicted.
                           NO_TIMEOUT disables idle eviction.

        Raises:
            InvalidConfigurationError: If max_idle_time is None or negative
        """
        self._max_idle_time = _require_duration("max_idle_time", max_idle_time)
        return self

    def max_create_connection_time(
        self, max_create_connection_time: timedelta
    ) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure the timeout for creating a connection from the factory.

        Defaults to NO_TIMEOUT (no timeout).

        Raises:
            InvalidConfigurationError: If the duration is None or negative
        """
        self._max_create_connection_time = _require_duration(
            "max_create_connection_time", max_create_connection_time
        )
        return self

    def max_acquire_time(self, max_acquire_time: timedelta) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure the timeout for acquiring a connection from the pool.

        When an acquire has to create a new connection, the creation time
        counts against this timeout too. Defaults to NO_TIMEOUT (no timeout).

        Raises:
            InvalidConfigurationError: If the duration is None or negative
        """
        self._max_acquire_time = _require_duration("max_acquire_time", max_acquire_time)
        return self

    def validation_query(self, validation_query: str) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure a query run against a connection before it is handed out.

        Without this call no validation is performed.

        Raises:
            InvalidConfigurationError: If validation_query is None or not a str
        """
        self._validation_query = _require_validation_query(validation_query)
        return self

    def customizer(self, customizer: Customizer) -> "ConnectionPoolConfigurationBuilder":
        """
        Configure a hook that fine-tunes the engine's internal pool builder.

        The pool engine calls it exactly once, synchronously, before it
        finalizes the pool.

        Raises:
            InvalidConfigurationError: If customizer is None or not callable
        """
        self._customizer = _require_customizer(customizer)
        return self

    def build(self) -> ConnectionPoolConfiguration:
        """Return a configuration holding the builder's current values."""
        config = ConnectionPoolConfiguration(
            connection_factory=self._connection_factory,
            initial_size=self._initial_size,
            max_size=self._max_size,
            max_idle_time=self._max_idle_time,
            max_create_connection_time=self._max_create_connection_time,
            max_acquire_time=self._max_acquire_time,
            validation_query=self._validation_query,
            customizer=self._customizer,
        )
        logger.debug(f"Built connection pool configuration: {self!r}")
        return config

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"connection_factory={self._connection_factory!r}, "
            f"max_idle_time={self._max_idle_time!r}, "
            f"max_create_connection_time={self._max_create_connection_time!r}, "
            f"max_acquire_time={self._max_acquire_time!r}, "
            f"initial_size={self._initial_size!r}, "
            f"max_size={self._max_size!r}, "
            f"validation_query={self._validation_query!r})"
        )


__all__ = [
    "ConnectionPoolConfiguration",
    "ConnectionPoolConfigurationBuilder",
    "NO_TIMEOUT",
    "DEFAULT_INITIAL_SIZE",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MAX_IDLE_TIME",
]
