"""Client side of the board: API client and view-model."""

from taskboard.client.api_client import TaskApiClient, TaskApiError
from taskboard.client.board import BoardViewModel


__all__ = [
    "BoardViewModel",
    "TaskApiClient",
    "TaskApiError",
]
