"""Shared pytest fixtures."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from facilbook.api.factory import create_app  # noqa: E402
from facilbook.config import Settings  # noqa: E402
from helpers import make_store  # noqa: E402


@pytest.fixture(autouse=True)
def _no_db_password(monkeypatch):
    """DB_PASSWORD from the developer's shell must not leak into DSN tests."""
    monkeypatch.delenv("DB_PASSWORD", raising=False)


@pytest.fixture
def mock_store():
    """(store, conn, cur) with a mocked connection pool."""
    return make_store()


@pytest.fixture
def store(mock_store):
    return mock_store[0]


@pytest.fixture
def conn(mock_store):
    return mock_store[1]


@pytest.fixture
def cur(mock_store):
    return mock_store[2]


@pytest.fixture
def settings():
    return Settings(database_url="dbname=facilbook_test", allowed_origins=("*",))


@pytest.fixture
def client(store, settings):
    """TestClient without lifespan: the mocked store is already 'open'."""
    app = create_app(store=store, settings=settings)
    return TestClient(app, raise_server_exceptions=False)
