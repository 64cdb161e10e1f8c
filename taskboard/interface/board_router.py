"""Server-rendered kanban board page."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.templating import Jinja2Templates

from taskboard.core.config import constants
from taskboard.domain.task import TaskStatus
from taskboard.services import task_service


logger = logging.getLogger(__name__)

router = APIRouter(tags=["board"])

templates = Jinja2Templates(directory=str(constants.TEMPLATES_DIR))

COLUMN_TITLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


@router.get("/", include_in_schema=False)
@router.get("/board")
async def get_board(request: Request) -> Response:
    """Render the board with every live task grouped into its column."""
    tasks = await task_service.list_tasks()
    columns = task_service.group_by_status(tasks)

    logger.info("board_rendered", extra={"count": len(tasks)})

    return templates.TemplateResponse(
        request,
        name="board.html",
        context={
            "columns": [
                {"status": task_status.value, "title": COLUMN_TITLES[task_status], "tasks": columns[task_status]}
                for task_status in TaskStatus
            ],
            "title_max_length": constants.TITLE_MAX_LENGTH,
        },
    )
