"""Error classification and HTTP error mapping for the task API."""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from taskboard.core.db_client import DatabaseError
from taskboard.core.logging import log_with_context


logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_VALIDATION_FAILED = "ERR_VALIDATION_FAILED"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_DATABASE = "ERR_DATABASE"
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error body returned by the API."""

    code: str
    message: str
    detail: list[dict] | str | None = None


class TaskNotFoundError(KeyError):
    """Raised when a task does not exist or has been soft-deleted."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(task_id)

    def __str__(self) -> str:
        return f'Task with ID "{self.task_id}" not found.'


class InvalidTaskIdError(ValueError):
    """Raised when a task ID path parameter is not a UUID."""

    def __init__(self, raw_id: str) -> None:
        self.raw_id = raw_id
        super().__init__("Validation failed (uuid is expected)")


_STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.ERR_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ERR_TASK_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ERR_DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.ERR_UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_SEVERITY_BY_CODE: dict[str, ErrorSeverity] = {
    ErrorCode.ERR_VALIDATION_FAILED: ErrorSeverity.LOW,
    ErrorCode.ERR_TASK_NOT_FOUND: ErrorSeverity.LOW,
    ErrorCode.ERR_DATABASE: ErrorSeverity.HIGH,
    ErrorCode.ERR_UNKNOWN: ErrorSeverity.MEDIUM,
}


def _error_details(errors: Sequence[Any]) -> list[dict]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in errors
    ]


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an exception and return the structured error body for it.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message and optional detail
    """
    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(code=ErrorCode.ERR_TASK_NOT_FOUND, message=str(exception))

    if isinstance(exception, RequestValidationError | ValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION_FAILED,
            message="Validation failed",
            detail=_error_details(exception.errors()),
        )

    if isinstance(exception, InvalidTaskIdError):
        return ErrorResponse(code=ErrorCode.ERR_VALIDATION_FAILED, message=str(exception))

    if isinstance(exception, DatabaseError):
        return ErrorResponse(code=ErrorCode.ERR_DATABASE, message="A database error occurred.")

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
    )


def status_code_for(error: ErrorResponse) -> int:
    """Return the HTTP status code for a classified error."""
    return _STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def severity_for(error: ErrorResponse) -> ErrorSeverity:
    """Return the logging severity for a classified error."""
    return _SEVERITY_BY_CODE.get(error.code, ErrorSeverity.MEDIUM)


async def _handle_exception(request: Request, exc: Exception) -> JSONResponse:
    error = classify_error_with_response(exc)
    status_code = status_code_for(error)
    extra = {"path": request.url.path, "method": request.method, "code": error.code}

    if severity_for(error) is ErrorSeverity.LOW:
        log_with_context(logger, "info", "request_rejected", **extra)
    else:
        log_with_context(logger, "error", "request_failed", error=str(exc), **extra)

    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on a FastAPI application."""
    app.add_exception_handler(RequestValidationError, _handle_exception)
    app.add_exception_handler(TaskNotFoundError, _handle_exception)
    app.add_exception_handler(ValidationError, _handle_exception)
    app.add_exception_handler(InvalidTaskIdError, _handle_exception)
    app.add_exception_handler(DatabaseError, _handle_exception)
    app.add_exception_handler(Exception, _handle_exception)
