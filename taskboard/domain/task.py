"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskStatus(StrEnum):
    """Board column a task lives in."""

    TODO = "todo"
    PROGRESS = "progress"
    DONE = "done"


class Task(BaseModel):
    """Task data transfer object.

    Serialised with camelCase keys (``createdAt``) on the wire; either form is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique task ID (UUID)")
    title: str = Field(..., description="Task title")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current board column")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    deleted_at: datetime | None = Field(default=None, description="Soft-deletion timestamp")
