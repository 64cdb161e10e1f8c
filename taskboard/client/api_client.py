"""HTTP client for the task API."""

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from taskboard.core.config import constants, settings
from taskboard.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Raised when the API rejects a request or cannot be reached.

    ``status_code`` is None for transport failures (connection refused, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("detail") or response.reason_phrase)
    return response.reason_phrase


class TaskApiClient:
    """Async client for the /tasks endpoints.

    Usage:
        async with TaskApiClient() as api:
            tasks = await api.list_tasks()
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = constants.API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            logger.warning("task_api_unreachable", extra={"method": method, "path": path, "error": str(e)})
            raise TaskApiError(f"Could not reach task API: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "task_api_error",
                extra={"method": method, "path": path, "status_code": response.status_code, "error": message},
            )
            raise TaskApiError(message, status_code=response.status_code)

        return response

    async def list_tasks(self) -> list[Task]:
        """Fetch every live task."""
        response = await self._request("GET", "/tasks")
        return [Task.model_validate(item) for item in response.json()]

    async def create_task(self, title: str) -> Task:
        """Create a task; it lands in the todo column."""
        response = await self._request("POST", "/tasks", json={"title": title})
        return Task.model_validate(response.json())

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Task:
        """Move a task to another column."""
        response = await self._request("PATCH", f"/tasks/{task_id}", json={"status": TaskStatus(status).value})
        return Task.model_validate(response.json())

    async def delete_task(self, task_id: str) -> None:
        """Soft-delete a task."""
        await self._request("DELETE", f"/tasks/{task_id}")
