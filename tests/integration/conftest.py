"""Pytest configuration and fixtures for integration tests against a real SQLite file."""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.core import db_client
from taskboard.core.config import settings
from taskboard.core.schema import init_db
from taskboard.main import app


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the application at a throwaway database file."""
    path = tmp_path / "taskboard.db"
    monkeypatch.setattr(settings, "sqlite_db_path", str(path))
    return path


@pytest.fixture
async def sqlite_db(db_path: Path) -> AsyncIterator[Path]:
    """Initialized schema on a fresh file; the connection is closed afterwards."""
    await init_db()
    yield db_path
    await db_client.close_connection()


@pytest.fixture
def live_client(db_path: Path) -> Iterator[TestClient]:
    """Test client that runs the full lifespan (logging, schema creation, shutdown)."""
    with TestClient(app) as client:
        yield client
