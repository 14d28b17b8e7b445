"""
Graph API Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings:  Settings pointing at a per-test database path
    ├── fake_kuzu:      Patched `kuzu` module inside api.graph (no engine needed)
    ├── mock_graph_db:  MagicMock standing in for GraphDatabase
    ├── make_client:    Builds an HTTPX AsyncClient for any app
    └── test_client:    AsyncClient for an app wired to mock_graph_db
"""

import os
import tempfile
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Applied before any `api` import so the module-level settings never point
# at the working tree.
os.environ["KUZU_DB_PATH"] = os.path.join(
    tempfile.mkdtemp(prefix="graph_api_test_"), "data", "cve.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("NODE_ENV", None)

from api.config import Settings  # noqa: E402
from api.graph import GraphDatabase  # noqa: E402
from api.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings with the database under a fresh temporary directory."""
    return Settings(kuzu_db_path=str(tmp_path / "data" / "cve.db"))


@pytest.fixture
def fake_kuzu():
    """
    Replaces the `kuzu` module used by api.graph.

    Each `kuzu.Connection(...)` call returns a distinct MagicMock, so tests
    can tell whether a second connection was opened.
    """
    with patch("api.graph.kuzu") as mock_kuzu:
        mock_kuzu.Connection.side_effect = lambda database: MagicMock(name="Connection")
        yield mock_kuzu


@pytest.fixture
def mock_graph_db(tmp_path):
    """A GraphDatabase stand-in whose queries succeed."""
    db = MagicMock(spec=GraphDatabase)
    db.path = tmp_path / "data" / "cve.db"
    db.run_query.return_value = MagicMock(name="QueryResult")
    return db


@pytest.fixture
def make_client():
    """
    Returns a factory building an AsyncClient bound to an app.

    `raise_app_exceptions=False` lets tests observe the 500 response Starlette
    sends for unhandled errors instead of the re-raised exception.

    Usage:
        async with make_client(app) as client:
            response = await client.get("/health")
    """
    def _make(app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def test_client(test_settings, mock_graph_db, make_client):
    """AsyncClient for an app whose database is `mock_graph_db`."""
    app = create_app(settings=test_settings, graph_db=mock_graph_db)
    async with make_client(app) as client:
        yield client
