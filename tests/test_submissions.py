"""Tests for turning submission payloads into attempts."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from quizboard.core.errors import AttemptValidationError
from quizboard.services.grader import DEFAULT_ANSWER_KEY
from quizboard.services.submissions import MAX_ELAPSED_SECONDS, build_attempt, parse_timing
from tests.helpers import answers_with_score, perfect_answers, submission


def test_build_perfect_attempt():
    attempt = build_attempt(submission("a@example.com", 42), DEFAULT_ANSWER_KEY)

    assert attempt.name == "Tester"
    assert attempt.email == "a@example.com"
    assert attempt.score == 7
    assert attempt.perfect
    assert attempt.eligible
    assert attempt.elapsed_seconds == 42
    assert attempt.answers == perfect_answers()


def test_client_score_is_ignored():
    body = submission("a@example.com", 42, score=5)
    body["score"] = 7
    body["isAllCorrect"] = True

    attempt = build_attempt(body, DEFAULT_ANSWER_KEY)

    assert attempt.score == 5
    assert not attempt.perfect


def test_email_kept_exactly_as_sent():
    attempt = build_attempt(submission(" Mixed@Example.com", 10), DEFAULT_ANSWER_KEY)

    assert attempt.email == " Mixed@Example.com"


def test_name_is_trimmed():
    attempt = build_attempt(submission("a@x", 10, name="  Harry  "), DEFAULT_ANSWER_KEY)

    assert attempt.name == "Harry"


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("name", "", "Name required"),
        ("name", None, "Name required"),
        ("email", "   ", "Email required"),
        ("email", 12, "Email required"),
        ("answers", ["paper jam"], "answers must be an object"),
        ("email", "a\ud800@x", "Email contains invalid characters"),
        ("name", "Ha\udfffrry", "Name contains invalid characters"),
        ("answers", {"question1": "\ud800"}, "Answer to question1 contains invalid characters"),
        ("answers", {"question\ud800": "x"}, "Question id contains invalid characters"),
    ],
)
def test_invalid_fields(field, value, message):
    body = submission("a@example.com", 10)
    body[field] = value

    with pytest.raises(AttemptValidationError, match=message):
        build_attempt(body, DEFAULT_ANSWER_KEY)


def test_missing_email_rejected():
    body = submission("a@example.com", 10)
    del body["email"]

    with pytest.raises(AttemptValidationError, match="Email required"):
        build_attempt(body, DEFAULT_ANSWER_KEY)


def test_unknown_question_rejected():
    body = submission("a@example.com", 10)
    body["answers"]["question8"] = "extra"

    with pytest.raises(AttemptValidationError, match="question8"):
        build_attempt(body, DEFAULT_ANSWER_KEY)


def test_non_text_answer_rejected():
    body = submission("a@example.com", 10)
    body["answers"]["question1"] = 3

    with pytest.raises(AttemptValidationError, match="question1"):
        build_attempt(body, DEFAULT_ANSWER_KEY)


def test_missing_answers_count_as_wrong():
    body = submission("a@example.com", 10)
    body["answers"] = {"question1": "paper jam"}

    attempt = build_attempt(body, DEFAULT_ANSWER_KEY)

    assert attempt.score == 1
    assert json.loads(attempt.answers_json)["question7"] == ""


def test_timing_from_instants_floors_seconds():
    elapsed, started, completed = parse_timing(
        {
            "timing": {
                "startTime": "2025-03-01T10:00:00.000Z",
                "completionTime": "2025-03-01T10:01:05.900Z",
                "totalTimeSeconds": 999,
            }
        }
    )

    assert elapsed == 65
    assert started.tzinfo is not None
    assert completed > started


def test_timing_instants_stored_as_aware_utc():
    body = submission("a@example.com", 0)
    body["timing"] = {
        "start_time": "2025-03-01T12:00:00+02:00",
        "completion_time": "2025-03-01T12:00:30+02:00",
    }

    attempt = build_attempt(body, DEFAULT_ANSWER_KEY)

    assert attempt.elapsed_seconds == 30
    assert attempt.started_at.utcoffset() == timedelta(0)
    assert attempt.started_at.hour == 10
    assert attempt.completed_at == datetime(2025, 3, 1, 10, 0, 30, tzinfo=timezone.utc)


def test_timing_instants_without_offset_are_taken_as_utc():
    body = submission("a@example.com", 0)
    body["timing"] = {
        "start_time": "2025-03-01T12:00:00",
        "completion_time": "2025-03-01T12:00:30",
    }

    attempt = build_attempt(body, DEFAULT_ANSWER_KEY)

    assert attempt.started_at == datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_timing_falls_back_to_elapsed_seconds():
    assert parse_timing({"elapsed_seconds": 12.7})[0] == 12


def test_largest_elapsed_time_is_accepted():
    assert parse_timing({"elapsed_seconds": MAX_ELAPSED_SECONDS})[0] == MAX_ELAPSED_SECONDS


@pytest.mark.parametrize(
    "body, message",
    [
        ({}, "Completion time required"),
        ({"elapsed_seconds": -1}, "must not be negative"),
        ({"elapsed_seconds": True}, "number of seconds"),
        ({"elapsed_seconds": "12"}, "number of seconds"),
        ({"elapsed_seconds": 10**30}, "too large"),
        ({"timing": {"total_time_seconds": MAX_ELAPSED_SECONDS + 1}}, "too large"),
        ({"timing": "fast"}, "timing must be an object"),
        ({"timing": {"start_time": "yesterday", "total_time_seconds": 3}}, "valid timestamp"),
        (
            {
                "timing": {
                    "start_time": "2025-03-01T10:01:00Z",
                    "completion_time": "2025-03-01T10:00:00Z",
                }
            },
            "must not be negative",
        ),
        (
            {
                "timing": {
                    "start_time": "2025-03-01T10:00:00",
                    "completion_time": "2025-03-01T10:01:00Z",
                }
            },
            "agree on a timezone",
        ),
    ],
)
def test_invalid_timing(body, message):
    with pytest.raises(AttemptValidationError, match=message):
        parse_timing(body)


def test_answers_with_score_helper_matches_grader():
    body = submission("a@example.com", 10)
    body["answers"] = answers_with_score(4)

    assert build_attempt(body, DEFAULT_ANSWER_KEY).score == 4
