# src/dbpool/protocols.py
"""
Structural types for the collaborators of a pool configuration.

The configuration only references these objects, it never calls them:
the connection factory is used by the pool engine to open connections,
and the customizer is called by the engine with its own pool builder.
"""

from typing import Any, Callable, Dict, Protocol, runtime_checkable


# =============================================================================
# CONNECTION FACTORY
# =============================================================================

@runtime_checkable
class ConnectionFactory(Protocol):
    """
    Protocol describing a source of database connections.

    Drivers expose different shapes (sync or awaitable ``create``), so the
    builder accepts any non-None object; this protocol documents what a
    pool engine expects to find.
    """

    def create(self) -> Any:
        """Open a new connection (or return an awaitable resolving to one)."""
        ...

    @property
    def metadata(self) -> Dict[str, Any]:
        """Driver metadata such as name and version."""
        ...


# =============================================================================
# POOL BUILDER
# =============================================================================

@runtime_checkable
class PoolBuilder(Protocol):
    """
    Marker protocol for the engine-side object handed to a customizer.

    Its concrete API belongs to the pool engine.
    """


Customizer = Callable[[Any], None]


def noop_customizer(pool_builder: Any) -> None:
    """Default customizer: leaves the pool builder untouched."""
    return None


__all__ = [
    "ConnectionFactory",
    "PoolBuilder",
    "Customizer",
    "noop_customizer",
]
