"""Builders shared by the test modules."""

import json
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from quizboard.models import Attempt
from quizboard.services.grader import DEFAULT_ANSWER_KEY, QUESTION_IDS

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_attempt(
    email: str,
    score: int,
    elapsed: int,
    *,
    ts: Optional[int] = None,
    name: Optional[str] = None,
    attempt_id: Optional[int] = None,
) -> Attempt:
    """Build an unsaved Attempt; ``ts`` is seconds after BASE_TIME."""
    kwargs = {}
    if ts is not None:
        kwargs["submitted_at"] = BASE_TIME + timedelta(seconds=ts)
    return Attempt(
        id=attempt_id,
        name=name or email.split("@")[0],
        email=email,
        answers_json=json.dumps({}),
        score=score,
        perfect=score == 7,
        elapsed_seconds=elapsed,
        **kwargs,
    )


def perfect_answers() -> Dict[str, str]:
    return {question_id: DEFAULT_ANSWER_KEY[question_id][0] for question_id in QUESTION_IDS}


def answers_with_score(score: int) -> Dict[str, str]:
    answers = perfect_answers()
    for question_id in QUESTION_IDS[score:]:
        answers[question_id] = "wrong"
    return answers


def submission(
    email: str,
    elapsed: int,
    *,
    score: int = 7,
    name: str = "Tester",
) -> Dict[str, object]:
    return {
        "name": name,
        "email": email,
        "answers": answers_with_score(score),
        "timing": {"total_time_seconds": elapsed},
    }
