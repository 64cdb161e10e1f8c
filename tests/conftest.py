"""Pytest configuration and shared fixtures."""

import uuid

import pytest
from fastapi.testclient import TestClient

from taskboard.main import app


@pytest.fixture
def test_client() -> TestClient:
    """FastAPI test client without running the lifespan (no database start-up)."""
    return TestClient(app)


@pytest.fixture
def task_id_factory():
    """Factory for valid-but-unknown task IDs.

    Usage:
        missing_id = task_id_factory()
    """

    def _make() -> str:
        return str(uuid.uuid4())

    return _make
