"""Tests for error classification."""

import pytest
from pydantic import ValidationError

from taskboard.core.db_client import DatabaseError, RecordNotFoundError
from taskboard.core.errors import (
    ErrorCode,
    ErrorSeverity,
    InvalidTaskIdError,
    TaskNotFoundError,
    classify_error_with_response,
    severity_for,
    status_code_for,
)
from taskboard.domain.create_models import TaskCreate


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    def test_task_not_found(self) -> None:
        error = classify_error_with_response(TaskNotFoundError("abc"))

        assert error.code == ErrorCode.ERR_TASK_NOT_FOUND
        assert error.message == 'Task with ID "abc" not found.'
        assert status_code_for(error) == 404
        assert severity_for(error) is ErrorSeverity.LOW

    def test_invalid_task_id(self) -> None:
        error = classify_error_with_response(InvalidTaskIdError("nope"))

        assert error.code == ErrorCode.ERR_VALIDATION_FAILED
        assert error.message == "Validation failed (uuid is expected)"
        assert status_code_for(error) == 400

    def test_internal_value_error_is_not_a_client_error(self) -> None:
        error = classify_error_with_response(ValueError("Empty update payload"))

        assert error.code == ErrorCode.ERR_UNKNOWN
        assert error.message == "An unexpected error occurred."
        assert status_code_for(error) == 500

    def test_pydantic_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate(title="   ")

        error = classify_error_with_response(exc_info.value)

        assert error.code == ErrorCode.ERR_VALIDATION_FAILED
        assert error.message == "Validation failed"
        assert error.detail[0]["loc"] == ["title"]
        assert "Title must be between" in error.detail[0]["msg"]
        assert status_code_for(error) == 400

    def test_database_error_hides_internals(self) -> None:
        error = classify_error_with_response(DatabaseError("Failed to list records from tasks: disk I/O error"))

        assert error.code == ErrorCode.ERR_DATABASE
        assert "disk" not in error.message
        assert status_code_for(error) == 500
        assert severity_for(error) is ErrorSeverity.HIGH

    def test_unknown_error(self) -> None:
        error = classify_error_with_response(RuntimeError("boom"))

        assert error.code == ErrorCode.ERR_UNKNOWN
        assert status_code_for(error) == 500


@pytest.mark.unit
class TestExceptionHierarchy:
    def test_task_not_found_is_key_error(self) -> None:
        assert issubclass(TaskNotFoundError, KeyError)

    def test_record_not_found_is_database_and_key_error(self) -> None:
        error = RecordNotFoundError("Record not found in tasks: 1")

        assert isinstance(error, DatabaseError)
        assert isinstance(error, KeyError)
        assert str(error) == "Record not found in tasks: 1"
