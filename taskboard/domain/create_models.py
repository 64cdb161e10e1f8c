"""Pydantic models for creating records in database."""

from pydantic import BaseModel, Field, field_validator

from taskboard.core.config import constants


class TaskCreate(BaseModel):
    """Payload for creating a task. New tasks always start in the todo column."""

    title: str = Field(..., description="Short task title")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Trim the title and check its length."""
        v = v.strip()
        if not constants.TITLE_MIN_LENGTH <= len(v) <= constants.TITLE_MAX_LENGTH:
            msg = f"Title must be between {constants.TITLE_MIN_LENGTH} and {constants.TITLE_MAX_LENGTH} characters"
            raise ValueError(msg)
        return v
