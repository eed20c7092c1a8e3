"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session, SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_error_handlers, register_routes
from .core import ALLOWED_CORS_ORIGINS, DB_RESET, LOG_LEVEL, PORT, STATIC_DIR, engine
from .core.logging import configure_logging
from .services.attempts import reindex_claims

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DB_RESET:
        logger.warning("DB_RESET is set, dropping all tables")
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        reindex_claims(session)
    logger.info("Quiz backend ready (database %s)", engine.url.render_as_string())
    yield


def mount_quiz_page(app: FastAPI, directory: Path) -> None:
    """Serve ``quiz.html`` at ``/`` and the rest of ``directory`` under ``/static``."""

    page = directory / "quiz.html"

    @app.get("/", include_in_schema=False)
    def quiz_page() -> FileResponse:
        if not page.is_file():
            raise HTTPException(404, "Quiz page not found")
        return FileResponse(page)

    app.mount("/static", StaticFiles(directory=directory), name="static")


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)
    app = FastAPI(title="Quiz Leaderboard API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)
    if STATIC_DIR is not None:
        mount_quiz_page(app, STATIC_DIR)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quizboard.app:app", host="127.0.0.1", port=PORT, reload=True)
