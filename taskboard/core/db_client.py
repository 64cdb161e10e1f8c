"""SQLite database client wrapper with CRUD and soft-delete operations."""

import asyncio
import json
import logging
import re
import threading
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from taskboard.core.config import settings


logger = logging.getLogger(__name__)

DEFAULT_SORT = "created_at ASC"


class DatabaseError(RuntimeError):
    """Raised when a database operation fails."""


class RecordNotFoundError(DatabaseError, KeyError):
    """Raised when a live record with the requested ID does not exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Record not found"


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def sanitize_param(value: str | int | float | bool | None) -> str:
    """Escape a value for safe embedding in filter queries via json.dumps."""
    return json.dumps(str(value))[1:-1]


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


_CONDITION_PATTERN = re.compile(r"""^(\w+)\s*=\s*"([^"]*)"$""")


def parse_filter(filter_query: str) -> tuple[str, list[str]]:
    """Parse ``field = "value"`` conditions joined by ``&&`` into a WHERE clause.

    Values are always bound as strings.

    Example:
        parse_filter('status = "todo" && title = "Buy milk"')
    """
    if not filter_query:
        return "", []

    conditions = []
    params = []
    for raw_part in filter_query.split("&&"):
        part = raw_part.strip()
        match = _CONDITION_PATTERN.match(part)
        if not match:
            msg = f"Invalid filter syntax: {part}"
            raise ValueError(msg)
        conditions.append(f"{match.group(1)} = ?")
        params.append(match.group(2))

    return " AND ".join(conditions), params


def parse_sort(sort: str) -> str:
    """Turn a sort expression into a safe ORDER BY clause.

    Accepts ``field``, ``-field`` (descending) or ``field ASC|DESC``.
    Anything else falls back to the default ordering.
    """
    if not sort:
        return DEFAULT_SORT

    cleaned = sort.strip()
    if re.match(r"^-[A-Za-z_][A-Za-z0-9_]*$", cleaned):
        return f"{cleaned[1:]} DESC"

    match = re.match(r"^([A-Za-z_][A-Za-z0-9_]*)\s*(ASC|DESC)?$", cleaned, re.IGNORECASE)
    if match:
        direction = (match.group(2) or "ASC").upper()
        return f"{match.group(1)} {direction}"

    logger.warning("Invalid sort parameter, using default", extra={"sort": sort})
    return DEFAULT_SORT


def _serialize_values(data: dict[str, Any]) -> list[Any]:
    values = []
    for val in data.values():
        if isinstance(val, datetime):
            values.append(val.isoformat())
        elif isinstance(val, dict | list):
            values.append(json.dumps(val))
        else:
            values.append(val)
    return values


def _row_to_record(cursor: aiosqlite.Cursor, row: tuple) -> dict[str, Any]:
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row, strict=True))


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


def _cache_key(db_path: str | None) -> tuple[int, int, str]:
    loop = asyncio.get_running_loop()
    return threading.get_ident(), id(loop), str(get_db_path(db_path))


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    cache_key = _cache_key(db_path)
    thread_id, loop_id, path = cache_key

    if cache_key in _db_connections:
        return _db_connections[cache_key]

    async with _db_lock:
        # Double-check after acquiring lock
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        Path(path).parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(path)
        await conn.execute("PRAGMA foreign_keys = ON")
        await conn.execute("PRAGMA journal_mode = WAL")

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": path, "thread_id": thread_id, "loop_id": loop_id},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    cache_key = _cache_key(db_path)
    thread_id, loop_id, path = cache_key

    if cache_key not in _db_connections:
        return

    try:
        async with _db_lock:
            conn = _db_connections.pop(cache_key, None)
            if conn is not None:
                await conn.close()
                logger.info(
                    "Closed SQLite connection",
                    extra={"thread_id": thread_id, "loop_id": loop_id, "db_path": path},
                )
    except Exception as e:
        logger.warning(
            "Error closing SQLite connection",
            extra={"error": str(e), "thread_id": thread_id, "loop_id": loop_id},
        )


async def create_record(*, collection: str, data: dict[str, Any]) -> dict[str, Any]:
    """Insert a new record and return it with its generated id and timestamps."""
    _validate_collection_name(collection)
    now = utc_now()
    record_data = {"id": str(uuid.uuid4()), **data, "created_at": now, "updated_at": now}

    try:
        conn = await get_connection()

        columns_str = ", ".join(record_data)
        placeholders_str = ", ".join("?" for _ in record_data)

        query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str})"  # noqa: S608 - collection is validated
        await conn.execute(query, _serialize_values(record_data))
        await conn.commit()
    except aiosqlite.OperationalError as e:
        if "no such table" in str(e):
            logger.error("Table not found", extra={"collection": collection})
            msg = f"Table '{collection}' does not exist. Call init_db() first."
            raise DatabaseError(msg) from e
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise DatabaseError(msg) from e
    except Exception as e:
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise DatabaseError(msg) from e

    logger.info("Created record", extra={"collection": collection, "record_id": record_data["id"]})
    return await get_record(collection=collection, record_id=record_data["id"])


async def get_record(*, collection: str, record_id: str, include_deleted: bool = False) -> dict[str, Any]:
    """Fetch a single record by ID, raising RecordNotFoundError if not found.

    Soft-deleted records are treated as missing unless ``include_deleted`` is set.
    """
    _validate_collection_name(collection)
    try:
        conn = await get_connection()

        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        if not include_deleted:
            query += " AND deleted_at IS NULL"
        cursor = await conn.execute(query, (record_id,))
        row = await cursor.fetchone()
    except Exception as e:
        logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to get record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if row is None:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
    return _row_to_record(cursor, row)


async def update_record(*, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """Update a live record by ID and return the updated record."""
    if not data:
        msg = "Empty update payload"
        raise ValueError(msg)

    _validate_collection_name(collection)
    update_data = {**data, "updated_at": utc_now()}

    try:
        conn = await get_connection()

        set_clause = ", ".join(f"{key} = ?" for key in update_data)
        values = [*_serialize_values(update_data), record_id]

        query = f"UPDATE {collection} SET {set_clause} WHERE id = ? AND deleted_at IS NULL"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, values)
        await conn.commit()
    except Exception as e:
        logger.error("update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to update record in {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
    return await get_record(collection=collection, record_id=record_id)


async def soft_delete_record(*, collection: str, record_id: str) -> None:
    """Mark a live record as deleted, raising RecordNotFoundError if nothing was affected."""
    _validate_collection_name(collection)
    now = utc_now()

    try:
        conn = await get_connection()

        query = f"UPDATE {collection} SET deleted_at = ?, updated_at = ? WHERE id = ? AND deleted_at IS NULL"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (now, now, record_id))
        await conn.commit()
    except Exception as e:
        logger.error(
            "soft_delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)}
        )
        msg = f"Failed to delete record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Soft-deleted record", extra={"collection": collection, "record_id": record_id})


async def list_records(
    *,
    collection: str,
    page: int = 1,
    per_page: int | None = 50,
    filter_query: str = "",
    sort: str = "",
    include_deleted: bool = False,
) -> list[dict[str, Any]]:
    """List records with optional filtering, sorting, and pagination.

    ``per_page=None`` returns every matching record.
    """
    _validate_collection_name(collection)
    where_clause, params = parse_filter(filter_query)
    conditions = [where_clause] if where_clause else []
    if not include_deleted:
        conditions.append("deleted_at IS NULL")

    where_sql = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    order_sql = parse_sort(sort)
    query = f"SELECT * FROM {collection} {where_sql} ORDER BY {order_sql}"  # noqa: S608 - collection is validated
    if per_page is not None:
        query += " LIMIT ? OFFSET ?"
        params = [*params, per_page, (page - 1) * per_page]

    try:
        conn = await get_connection()

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()
    except Exception as e:
        logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to list records from {collection}: {e}"
        raise DatabaseError(msg) from e

    records = [_row_to_record(cursor, row) for row in rows]
    logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
    return records

