"""Task service for board CRUD operations and soft deletion."""

import logging
from collections.abc import Iterable

from taskboard.core import db_client
from taskboard.core.db_client import RecordNotFoundError, sanitize_param
from taskboard.core.errors import TaskNotFoundError
from taskboard.core.logging import span
from taskboard.domain.create_models import TaskCreate
from taskboard.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)

COLLECTION = "tasks"


async def create_task(*, title: str) -> Task:
    """Create a new task in the todo column.

    Args:
        title: Task title; surrounding whitespace is trimmed

    Returns:
        The stored task

    Raises:
        pydantic.ValidationError: If the title is empty or too long
        db_client.DatabaseError: If database operation fails
    """
    with span("task_service.create_task"):
        payload = TaskCreate(title=title)

        record = await db_client.create_record(
            collection=COLLECTION,
            data={"title": payload.title, "status": TaskStatus.TODO.value},
        )
        logger.info("Created task", extra={"task_id": record["id"]})

        return Task.model_validate(record)


async def list_tasks(*, status: TaskStatus | None = None) -> list[Task]:
    """Get every live task, oldest first.

    Args:
        status: Only return tasks in this column

    Returns:
        Tasks ordered by creation time
    """
    with span("task_service.list_tasks"):
        filter_query = f'status = "{sanitize_param(status.value)}"' if status else ""

        records = await db_client.list_records(
            collection=COLLECTION,
            per_page=None,
            filter_query=filter_query,
            sort="created_at",
        )
        logger.info("Listed tasks", extra={"count": len(records), "status": status.value if status else None})

        return [Task.model_validate(record) for record in records]


async def get_task(*, task_id: str) -> Task:
    """Get a single live task.

    Raises:
        TaskNotFoundError: If the task does not exist or was deleted
    """
    with span("task_service.get_task"):
        try:
            record = await db_client.get_record(collection=COLLECTION, record_id=task_id)
        except RecordNotFoundError as e:
            raise TaskNotFoundError(task_id) from e

        return Task.model_validate(record)


async def update_task_status(*, task_id: str, status: TaskStatus) -> Task:
    """Move a task to another column.

    Any column may move to any other; re-sending the current status still refreshes updated_at.

    Args:
        task_id: ID of the task to move
        status: Target column

    Returns:
        The updated task

    Raises:
        TaskNotFoundError: If the task does not exist or was deleted
    """
    with span("task_service.update_task_status"):
        try:
            record = await db_client.update_record(
                collection=COLLECTION,
                record_id=task_id,
                data={"status": TaskStatus(status).value},
            )
        except RecordNotFoundError as e:
            raise TaskNotFoundError(task_id) from e

        logger.info("Updated task status", extra={"task_id": task_id, "status": record["status"]})
        return Task.model_validate(record)


async def delete_task(*, task_id: str) -> None:
    """Soft-delete a task. The row stays in the table with deleted_at set.

    Raises:
        TaskNotFoundError: If the task does not exist or was already deleted
    """
    with span("task_service.delete_task"):
        try:
            await db_client.soft_delete_record(collection=COLLECTION, record_id=task_id)
        except RecordNotFoundError as e:
            raise TaskNotFoundError(task_id) from e

        logger.info("Deleted task", extra={"task_id": task_id})


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """Partition tasks into board columns, preserving their order.

    Every status is present in the result, even when its column is empty.
    """
    columns: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        columns[task.status].append(task)
    return columns
