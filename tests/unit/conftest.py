"""Pytest configuration and fixtures for unit tests."""

import pytest

from tests.unit.mocks import FakeTaskApi, InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches taskboard.core.db_client functions to use InMemoryDBClient."""
    monkeypatch.setattr("taskboard.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("taskboard.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("taskboard.core.db_client.update_record", in_memory_db.update_record)
    monkeypatch.setattr("taskboard.core.db_client.soft_delete_record", in_memory_db.soft_delete_record)
    monkeypatch.setattr("taskboard.core.db_client.list_records", in_memory_db.list_records)

    return in_memory_db


@pytest.fixture
def fake_api():
    """Provides an empty FakeTaskApi."""
    return FakeTaskApi()
