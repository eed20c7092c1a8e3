"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_DISPLAY_LIMIT, LEADERBOARD_MAX_LIMIT
from ...services.grader import TOTAL_QUESTIONS

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness check."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "total_questions": TOTAL_QUESTIONS,
        "leaderboard_display_limit": LEADERBOARD_DISPLAY_LIMIT,
        "leaderboard_default_limit": LEADERBOARD_DEFAULT_LIMIT,
        "leaderboard_max_limit": LEADERBOARD_MAX_LIMIT,
    }


__all__ = ["router"]
