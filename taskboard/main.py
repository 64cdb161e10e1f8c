"""taskboard - kanban task tracker with a REST API and a three-column board."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.core.config import settings
from taskboard.core.db_client import close_connection
from taskboard.core.errors import register_exception_handlers
from taskboard.core.logging import configure_logfire, instrument_fastapi
from taskboard.core.schema import init_db
from taskboard.interface.board_router import router as board_router
from taskboard.interface.task_router import router as task_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    await init_db()
    logger.info("Database initialized", extra={"db_path": settings.sqlite_db_path})
    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="taskboard",
    description="Kanban task tracker",
    version=__version__,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type"],
)

register_exception_handlers(app)

# Register routers
app.include_router(task_router)
app.include_router(board_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
