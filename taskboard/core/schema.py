"""SQLite schema management (code-first approach)."""

import logging

from taskboard.core.config import constants
from taskboard.core.db_client import get_connection


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = ["tasks"]

TABLE_SCHEMAS: dict[str, str] = {
    "tasks": f"""
        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL CHECK (
                length(title) BETWEEN {constants.TITLE_MIN_LENGTH} AND {constants.TITLE_MAX_LENGTH}
            ),
            status TEXT NOT NULL DEFAULT 'todo' CHECK (status IN ('todo', 'progress', 'done')),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            deleted_at TEXT
        )
    """,
}

INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks (status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_deleted_at ON tasks (deleted_at)",
]


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes. Safe to call on every start-up."""
    conn = await get_connection(db_path=db_path)

    for name in COLLECTIONS:
        await conn.execute(TABLE_SCHEMAS[name])
    for statement in INDEXES:
        await conn.execute(statement)
    await conn.commit()

    logger.info("Database schema initialized", extra={"collections": COLLECTIONS})
