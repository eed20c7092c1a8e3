"""Quiz submission endpoint."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.attempts import record_attempt
from ...services.grader import get_answer_key
from ...services.submissions import build_attempt

router = APIRouter(tags=["quiz"])


@router.post("/submit-quiz")
def submit_quiz(
    body: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    answer_key: Dict[str, List[str]] = Depends(get_answer_key),
):
    """Grade, store and rank a quiz attempt."""

    attempt = build_attempt(body, answer_key)
    result = record_attempt(session, attempt)

    ranking = None
    if result.eligible:
        ranking = {
            "eligible": True,
            "current_rank": result.rank,
            "total_perfect_scores": result.total_perfect,
            "is_first_perfect": result.is_first_perfect,
            "completion_time": attempt.elapsed_seconds,
        }

    return {
        "success": True,
        "message": "Quiz submitted successfully!",
        "id": attempt.id,
        "score": attempt.score,
        "total_questions": len(answer_key),
        "is_all_correct": attempt.perfect,
        "completion_time": attempt.elapsed_seconds,
        "ranking": ranking,
    }


__all__ = ["router"]
