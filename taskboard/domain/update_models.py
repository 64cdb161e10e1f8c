"""Update models for database operations."""

from pydantic import BaseModel

from taskboard.domain.task import TaskStatus


class TaskStatusUpdate(BaseModel):
    """Payload for moving a task to another column."""

    status: TaskStatus
