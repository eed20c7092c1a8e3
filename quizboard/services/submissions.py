"""Turn a raw submission payload into an Attempt row."""

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..core.errors import AttemptValidationError
from ..core.time import as_utc, parse_instant
from ..models import Attempt
from .grader import AnswerKey, grade_answers

MAX_NAME_LENGTH = 80
MAX_EMAIL_LENGTH = 254
MAX_ANSWER_LENGTH = 500
# Largest value a 32-bit integer column holds.
MAX_ELAPSED_SECONDS = 2**31 - 1


def _pick(mapping: Mapping[str, Any], *keys: str) -> Any:
    # The browser client sends camelCase, scripts tend to send snake_case.
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def _text(value: str, label: str) -> str:
    # JSON escapes can carry lone surrogates that no database driver accepts.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise AttemptValidationError(f"{label} contains invalid characters") from exc
    return value


def _instant(raw: Any, label: str) -> Optional[datetime]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise AttemptValidationError(f"{label} must be an ISO-8601 string")
    try:
        return parse_instant(raw)
    except ValueError as exc:
        raise AttemptValidationError(f"{label} is not a valid timestamp") from exc


def _seconds(raw: Any, label: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
        raise AttemptValidationError(f"{label} must be a number of seconds")
    if raw < 0:
        raise AttemptValidationError(f"{label} must not be negative")
    if raw > MAX_ELAPSED_SECONDS:
        raise AttemptValidationError(f"{label} is too large")
    return int(math.floor(raw))


def parse_identity(body: Mapping[str, Any]) -> tuple[str, str]:
    name = body.get("name")
    email = body.get("email")
    if not isinstance(name, str) or not name.strip():
        raise AttemptValidationError("Name required")
    if not isinstance(email, str) or not email.strip():
        raise AttemptValidationError("Email required")
    if len(email) > MAX_EMAIL_LENGTH:
        raise AttemptValidationError("Email too long")
    # The email is the dedup key and is kept exactly as sent.
    return _text(name.strip()[:MAX_NAME_LENGTH], "Name"), _text(email, "Email")


def parse_answers(raw: Any, answer_key: AnswerKey) -> Dict[str, str]:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise AttemptValidationError("answers must be an object")
    unknown = sorted(set(raw) - set(answer_key))
    if unknown:
        for question_id in unknown:
            _text(question_id, "Question id")
        raise AttemptValidationError(f"Unknown question ids: {', '.join(unknown)}")

    answers: Dict[str, str] = {}
    for question_id in answer_key:
        value = raw.get(question_id)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise AttemptValidationError(f"Answer to {question_id} must be text")
        answers[question_id] = _text(value[:MAX_ANSWER_LENGTH], f"Answer to {question_id}")
    return answers


def parse_timing(
    body: Mapping[str, Any],
) -> tuple[int, Optional[datetime], Optional[datetime]]:
    """Return (elapsed seconds, start, completion) from a submission.

    Start and completion instants win over a reported total when both are
    present, because the total is derived from them on the client anyway.
    """

    timing = body.get("timing") or {}
    if not isinstance(timing, dict):
        raise AttemptValidationError("timing must be an object")

    started_at = _instant(_pick(timing, "start_time", "startTime"), "timing.start_time")
    completed_at = _instant(
        _pick(timing, "completion_time", "completionTime"), "timing.completion_time"
    )

    if started_at is not None and completed_at is not None:
        if (started_at.tzinfo is None) != (completed_at.tzinfo is None):
            raise AttemptValidationError("timing instants must agree on a timezone")
        delta = (completed_at - started_at).total_seconds()
        return _seconds(delta, "elapsed time"), started_at, completed_at

    total = _pick(timing, "total_time_seconds", "totalTimeSeconds")
    if total is None:
        total = body.get("elapsed_seconds")
    if total is None:
        raise AttemptValidationError("Completion time required")
    return _seconds(total, "elapsed_seconds"), started_at, completed_at


def build_attempt(body: Mapping[str, Any], answer_key: AnswerKey) -> Attempt:
    """Validate and grade a submission. Any client-sent score is ignored."""

    if not isinstance(body, Mapping):
        raise AttemptValidationError("Submission must be a JSON object")

    name, email = parse_identity(body)
    answers = parse_answers(body.get("answers"), answer_key)
    elapsed_seconds, started_at, completed_at = parse_timing(body)
    grade = grade_answers(answers, answer_key)

    return Attempt(
        name=name,
        email=email,
        answers_json=json.dumps(answers),
        score=grade.correct,
        perfect=grade.perfect,
        elapsed_seconds=elapsed_seconds,
        started_at=as_utc(started_at) if started_at else None,
        completed_at=as_utc(completed_at) if completed_at else None,
    )


__all__ = [
    "build_attempt",
    "parse_answers",
    "parse_identity",
    "parse_timing",
]
