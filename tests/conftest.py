"""Pytest configuration and fixtures for sqlitepp tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from sqlitepp.application import Database, Query
from sqlitepp.infrastructure.container import Container
from sqlitepp.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def db(metrics_registry: MetricsRegistry) -> Generator[Database, None, None]:
    """Provide an open in-memory database."""
    database = Database(":memory:", metrics=metrics_registry)
    yield database
    database.close()


@pytest.fixture
def test_table(db: Database) -> Database:
    """Provide a database with the walkthrough's test table."""
    code = db.exec(
        "CREATE TABLE test (id INTEGER PRIMARY KEY NOT NULL, num INTEGER, "
        "name VARCHAR(20), flo FLOAT, data BLOB, comment TEXT)"
    )
    assert code == 0
    return db


@pytest.fixture
def query(test_table: Database) -> Generator[Query, None, None]:
    """Provide a query on the test table's database."""
    with Query(test_table) as q:
        yield q


@pytest.fixture
def reset_container() -> Generator[None, None, None]:
    """Reset the process container and logging configuration around a test."""
    Container.reset()
    yield
    Container.reset()
    structlog.reset_defaults()


@pytest.fixture
def metric_value(metrics_registry: MetricsRegistry) -> Callable[..., float]:
    """Read one sample from the isolated metrics registry."""

    def read(name: str, **labels: str) -> float:
        value = metrics_registry._registry.get_sample_value(name, labels or None)
        return value if value is not None else 0.0

    return read


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
