"""REST endpoints for board tasks."""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, Response, status

from taskboard.core.errors import ErrorResponse, InvalidTaskIdError
from taskboard.domain.create_models import TaskCreate
from taskboard.domain.task import Task, TaskStatus
from taskboard.domain.update_models import TaskStatusUpdate
from taskboard.services import task_service


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


def parse_task_id(task_id: str) -> str:
    """Validate the task ID path parameter before touching the database.

    Raises:
        InvalidTaskIdError: If the ID is not a UUID
    """
    try:
        return str(uuid.UUID(task_id))
    except ValueError as e:
        logger.info("invalid_task_id", extra={"task_id": task_id})
        raise InvalidTaskIdError(task_id) from e


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Task)
async def create_task(payload: TaskCreate) -> Task:
    """Create a task in the todo column."""
    return await task_service.create_task(title=payload.title)


@router.get("", response_model=list[Task])
async def get_tasks(status_filter: TaskStatus | None = Query(default=None, alias="status")) -> list[Task]:
    """List all live tasks, optionally for a single column."""
    return await task_service.list_tasks(status=status_filter)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str = Depends(parse_task_id)) -> Task:
    """Fetch one live task."""
    return await task_service.get_task(task_id=task_id)


@router.patch("/{task_id}", response_model=Task)
async def update_task_status(payload: TaskStatusUpdate, task_id: str = Depends(parse_task_id)) -> Task:
    """Move a task to another column."""
    return await task_service.update_task_status(task_id=task_id, status=payload.status)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str = Depends(parse_task_id)) -> Response:
    """Soft-delete a task."""
    await task_service.delete_task(task_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
