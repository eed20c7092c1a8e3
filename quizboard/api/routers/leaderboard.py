"""Leaderboard and statistics endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from ...core import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT, get_session, isoformat_utc
from ...services.attempts import get_statistics, list_leaderboard

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(
    limit: Optional[int] = Query(default=None, ge=1),
    session: Session = Depends(get_session),
) -> List[Dict[str, Any]]:
    """Fastest first perfect attempt per participant."""

    effective = min(limit or LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT)
    entries = list_leaderboard(session, effective)
    return [
        {
            "position": position,
            "name": entry.name,
            "elapsed_seconds": entry.elapsed_seconds,
            "submitted_at": isoformat_utc(entry.submitted_at),
        }
        for position, entry in enumerate(entries, start=1)
    ]


@router.get("/stats")
def get_stats(session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Aggregate numbers over every submission."""

    return asdict(get_statistics(session))


__all__ = ["router"]
