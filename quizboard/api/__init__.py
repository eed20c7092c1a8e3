"""API assembly helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import QuizError
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI) -> None:
    """Attach all application routers to the given app."""

    for router in ALL_ROUTERS:
        app.include_router(router)


async def _quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.public_message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON responses; never a fabricated result."""

    app.add_exception_handler(QuizError, _quiz_error_handler)


__all__ = ["register_error_handlers", "register_routes"]
