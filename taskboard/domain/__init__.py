"""Domain models and DTOs."""

from taskboard.domain.create_models import TaskCreate
from taskboard.domain.task import Task, TaskStatus
from taskboard.domain.update_models import TaskStatusUpdate


__all__ = [
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskStatusUpdate",
]
