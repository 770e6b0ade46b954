"""
Shared fixtures: a throwaway SQLite database per test and an app bound to it.
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from storefront.api.app import create_app
from storefront.config import Settings
from storefront.repositories import InMemoryCacheRepository


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "storefront.db"


@pytest.fixture
def settings(db_path):
    """Settings pointing at a fresh SQLite file."""
    return Settings(
        database_url_override=f"sqlite+aiosqlite:///{db_path}",
        db_create_schema=True,
        cache_backend="memory",
        cache_ttl=100,
        environment="development",
        log_level="warning",
        log_format="console",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(settings, clock):
    return create_app(settings, cache_store=InMemoryCacheRepository.create(clock=clock))


@pytest.fixture
def client(app):
    """Create a test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def raw_db(db_path):
    """Direct access to the SQLite file, bypassing the API and its cache."""
    conn = sqlite3.connect(db_path)
    yield conn
    conn.close()
