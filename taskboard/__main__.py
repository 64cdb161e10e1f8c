"""Run the API server: ``python -m taskboard``."""

import uvicorn

from taskboard.core.config import settings


def main() -> None:
    uvicorn.run("taskboard.main:app", host=settings.host, port=settings.port, reload=not settings.is_production)


if __name__ == "__main__":
    main()
