# tests/conftest.py
"""
Shared fixtures for the dbpool test suite.
"""

import logging
import os
from typing import Any, Dict, List

import pytest

from dbpool.configuration import ConnectionPoolConfigurationBuilder


class FakeConnectionFactory:
    """Connection factory stand-in that records every create() call."""

    def __init__(self, name: str = "fake"):
        self.name = name
        self.created: List[Any] = []

    def create(self) -> Any:
        connection = object()
        self.created.append(connection)
        return connection

    @property
    def metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "version": "1.0"}

    def __repr__(self) -> str:
        return f"FakeConnectionFactory({self.name!r})"


@pytest.fixture
def connection_factory():
    """A fresh fake connection factory."""
    return FakeConnectionFactory()


@pytest.fixture
def builder(connection_factory):
    """A builder for the fake connection factory with every default in place."""
    return ConnectionPoolConfigurationBuilder.create(connection_factory)


@pytest.fixture(autouse=True)
def clean_pool_env(monkeypatch):
    """Keep DBPOOL_POOL__* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("DBPOOL_POOL__"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _dbpool_debug_logging():
    """Let caplog see DEBUG records from dbpool loggers."""
    dbpool_logger = logging.getLogger("dbpool")
    previous = dbpool_logger.level
    dbpool_logger.setLevel(logging.DEBUG)
    yield
    dbpool_logger.setLevel(previous)
