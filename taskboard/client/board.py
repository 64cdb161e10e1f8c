"""Board view-model: three status columns kept in sync with the task API."""

import logging
from typing import Protocol

from taskboard.client.api_client import TaskApiError
from taskboard.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)


class TaskApi(Protocol):
    """The subset of the task API the board needs."""

    async def list_tasks(self) -> list[Task]: ...

    async def create_task(self, title: str) -> Task: ...

    async def update_task_status(self, task_id: str, status: TaskStatus) -> Task: ...

    async def delete_task(self, task_id: str) -> None: ...


class BoardViewModel:
    """In-memory todo/progress/done columns backed by the task API.

    The server is the source of truth: every mutation is followed by a full
    reload that replaces all three columns. A failed mutation also reloads
    before the error is re-raised, so the columns never keep a half-applied change.
    When that reload fails as well, the columns are restored from a snapshot
    and the mutation's own error is the one raised.
    """

    def __init__(self, api: TaskApi) -> None:
        self._api = api
        self.todo: list[Task] = []
        self.progress: list[Task] = []
        self.done: list[Task] = []

    def column(self, status: TaskStatus) -> list[Task]:
        """Return the live list backing a column."""
        return getattr(self, TaskStatus(status).value)

    def counts(self) -> dict[TaskStatus, int]:
        return {status: len(self.column(status)) for status in TaskStatus}

    def find(self, task_id: str) -> tuple[TaskStatus, int] | None:
        """Locate a card as (column, index), or None."""
        for status in TaskStatus:
            for index, task in enumerate(self.column(status)):
                if task.id == task_id:
                    return status, index
        return None

    async def load(self) -> None:
        """Fetch every task and re-derive all three columns."""
        tasks = await self._api.list_tasks()
        self.todo = [task for task in tasks if task.status == TaskStatus.TODO]
        self.progress = [task for task in tasks if task.status == TaskStatus.PROGRESS]
        self.done = [task for task in tasks if task.status == TaskStatus.DONE]
        logger.debug("board_loaded", extra={"counts": {str(k): v for k, v in self.counts().items()}})

    async def add_task(self, title: str) -> Task | None:
        """Create a task and reload. Blank titles are ignored without a request."""
        title = title.strip()
        if not title:
            return None

        snapshot = self._snapshot()
        try:
            task = await self._api.create_task(title)
        except TaskApiError:
            await self._recover("add_task", snapshot)
            raise

        await self.load()
        return task

    async def move_task(self, task_id: str, status: TaskStatus, index: int | None = None) -> None:
        """Handle a card being dropped onto a column.

        The card is moved locally first, then the status change is sent and the board reloaded.
        Dropping onto its own column only reorders and sends nothing.
        """
        target = TaskStatus(status)
        location = self.find(task_id)
        if location is None:
            logger.warning("move_unknown_task", extra={"task_id": task_id})
            return

        source, source_index = location
        if source == target:
            if index is not None:
                self.reorder(source, source_index, index)
            return

        snapshot = self._snapshot()
        card = self.column(source).pop(source_index)
        moved = card.model_copy(update={"status": target})
        destination = self.column(target)
        destination.insert(len(destination) if index is None else index, moved)

        try:
            await self._api.update_task_status(task_id, target)
        except TaskApiError:
            await self._recover("move_task", snapshot)
            raise

        await self.load()

    def reorder(self, status: TaskStatus, from_index: int, to_index: int) -> None:
        """Reorder cards inside one column. Ordering is local to this view."""
        cards = self.column(status)
        card = cards.pop(from_index)
        cards.insert(to_index, card)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task and reload."""
        snapshot = self._snapshot()
        try:
            await self._api.delete_task(task_id)
        except TaskApiError:
            await self._recover("delete_task", snapshot)
            raise

        await self.load()

    def _snapshot(self) -> tuple[list[Task], list[Task], list[Task]]:
        return list(self.todo), list(self.progress), list(self.done)

    async def _recover(self, action: str, snapshot: tuple[list[Task], list[Task], list[Task]]) -> None:
        """Reload after a failed mutation; if that fails too, put the columns back as they were."""
        logger.error("board_mutation_failed", extra={"action": action})
        try:
            await self.load()
        except TaskApiError as e:
            logger.error("board_reload_failed", extra={"action": action, "error": str(e)})
            self.todo, self.progress, self.done = snapshot
