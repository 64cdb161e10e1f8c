"""Tests for InMemoryDBClient implementation."""

import pytest

from taskboard.core.db_client import DatabaseError, RecordNotFoundError


@pytest.mark.unit
class TestInMemoryDBClient:
    """Test suite for InMemoryDBClient."""

    async def test_create_record(self, in_memory_db):
        """Test creating a record."""
        record = await in_memory_db.create_record("tasks", {"title": "Write notes", "status": "todo"})

        assert record["id"] is not None
        assert record["title"] == "Write notes"
        assert record["deleted_at"] is None
        assert record["created_at"] == record["updated_at"]

    async def test_create_record_generates_unique_ids(self, in_memory_db):
        record1 = await in_memory_db.create_record("tasks", {"title": "One"})
        record2 = await in_memory_db.create_record("tasks", {"title": "Two"})

        assert record1["id"] != record2["id"]

    async def test_create_record_invalid_data(self, in_memory_db):
        with pytest.raises(DatabaseError, match="Data must be a dictionary"):
            await in_memory_db.create_record("tasks", "invalid")

    async def test_get_record_not_found(self, in_memory_db):
        with pytest.raises(RecordNotFoundError, match="Record not found"):
            await in_memory_db.get_record("tasks", "nonexistent")

    async def test_get_record_invalid_id(self, in_memory_db):
        with pytest.raises(DatabaseError, match="Record ID must be a string"):
            await in_memory_db.get_record("tasks", 123)

    async def test_update_record(self, in_memory_db):
        """Test updating a record bumps updated_at only."""
        created = await in_memory_db.create_record("tasks", {"title": "Move me", "status": "todo"})
        updated = await in_memory_db.update_record("tasks", created["id"], {"status": "done"})

        assert updated["status"] == "done"
        assert updated["created_at"] == created["created_at"]
        assert updated["updated_at"] != created["updated_at"]

    async def test_update_record_empty_payload(self, in_memory_db):
        created = await in_memory_db.create_record("tasks", {"title": "Test"})
        with pytest.raises(ValueError, match="Empty update payload"):
            await in_memory_db.update_record("tasks", created["id"], {})

    async def test_soft_delete_hides_record(self, in_memory_db):
        """Deleted rows are kept but invisible to normal reads."""
        created = await in_memory_db.create_record("tasks", {"title": "Drop"})

        await in_memory_db.soft_delete_record("tasks", created["id"])

        with pytest.raises(RecordNotFoundError):
            await in_memory_db.get_record("tasks", created["id"])
        assert await in_memory_db.list_records("tasks") == []
        kept = await in_memory_db.get_record("tasks", created["id"], include_deleted=True)
        assert kept["deleted_at"] is not None

    async def test_soft_delete_twice_raises(self, in_memory_db):
        created = await in_memory_db.create_record("tasks", {"title": "Drop"})
        await in_memory_db.soft_delete_record("tasks", created["id"])

        with pytest.raises(RecordNotFoundError):
            await in_memory_db.soft_delete_record("tasks", created["id"])
        with pytest.raises(RecordNotFoundError):
            await in_memory_db.update_record("tasks", created["id"], {"status": "done"})

    async def test_list_records_filters(self, in_memory_db):
        await in_memory_db.create_record("tasks", {"title": "A", "status": "todo"})
        await in_memory_db.create_record("tasks", {"title": "B", "status": "done"})
        await in_memory_db.create_record("tasks", {"title": "C", "status": "todo"})

        todo = await in_memory_db.list_records("tasks", filter_query='status = "todo"')
        both = await in_memory_db.list_records("tasks", filter_query='status = "todo" && title = "C"')

        assert [r["title"] for r in todo] == ["A", "C"]
        assert [r["title"] for r in both] == ["C"]

    async def test_list_records_invalid_filter(self, in_memory_db):
        await in_memory_db.create_record("tasks", {"title": "Test"})

        with pytest.raises(ValueError, match="Invalid filter syntax"):
            await in_memory_db.list_records("tasks", filter_query="invalid filter")

    async def test_list_records_sort(self, in_memory_db):
        for title in ("Charlie", "Alice", "Bob"):
            await in_memory_db.create_record("tasks", {"title": title})

        ascending = await in_memory_db.list_records("tasks", sort="title")
        descending = await in_memory_db.list_records("tasks", sort="-title")

        assert [r["title"] for r in ascending] == ["Alice", "Bob", "Charlie"]
        assert [r["title"] for r in descending] == ["Charlie", "Bob", "Alice"]

    async def test_list_records_without_page_size(self, in_memory_db):
        for i in range(60):
            await in_memory_db.create_record("tasks", {"title": f"t{i}"})

        assert len(await in_memory_db.list_records("tasks")) == 50
        assert len(await in_memory_db.list_records("tasks", per_page=None)) == 60
