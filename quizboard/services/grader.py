"""Answer key handling and grading."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from ..core.config import ANSWER_KEY_FILE

logger = logging.getLogger(__name__)

TOTAL_QUESTIONS = 7
QUESTION_IDS = tuple(f"question{index}" for index in range(1, TOTAL_QUESTIONS + 1))

AnswerKey = Mapping[str, Sequence[str]]

DEFAULT_ANSWER_KEY: Dict[str, List[str]] = {
    "question1": ["paper jam", "paperjam", "jam", "paper stuck"],
    "question2": ["print head", "printhead", "head", "printer head"],
    "question3": [
        "printer setup",
        "setup",
        "installation",
        "printer installation",
        "configure",
        "configuration",
    ],
    "question4": [
        "instant ink",
        "instantink",
        "instant",
        "ink subscription",
        "subscription service",
    ],
    "question5": [
        "data product",
        "dataproduct",
        "data analytics",
        "analytics product",
        "data solution",
    ],
    "question6": [
        "root cause analysis",
        "rootcauseanalysis",
        "rca",
        "root cause",
        "cause analysis",
    ],
    "question7": [
        "telemetry",
        "remote monitoring",
        "data transmission",
        "remote data",
        "monitoring",
    ],
}


@dataclass(frozen=True)
class GradeResult:
    correct: int
    total: int
    details: Dict[str, bool] = field(default_factory=dict)

    @property
    def perfect(self) -> bool:
        return self.correct == self.total


def normalize_answer(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def grade_answers(answers: Mapping[str, Optional[str]], answer_key: AnswerKey) -> GradeResult:
    """Score free-text answers against the accepted answers of each question.

    Matching ignores case and surrounding whitespace. A question with no
    answer counts as incorrect.
    """

    details: Dict[str, bool] = {}
    for question_id, accepted in answer_key.items():
        given = normalize_answer(answers.get(question_id))
        details[question_id] = bool(given) and given in {
            normalize_answer(option) for option in accepted
        }
    return GradeResult(
        correct=sum(details.values()),
        total=len(answer_key),
        details=details,
    )


def load_answer_key(path: Path) -> Dict[str, List[str]]:
    """Read an answer key from a JSON object of question id -> accepted answers."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or set(raw) != set(QUESTION_IDS):
        raise RuntimeError(
            f"Answer key {path} must define exactly: {', '.join(QUESTION_IDS)}"
        )
    key: Dict[str, List[str]] = {}
    for question_id in QUESTION_IDS:
        options = raw[question_id]
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise RuntimeError(f"Answer key {path}: {question_id} must be a list of strings")
        key[question_id] = options
    return key


@lru_cache(maxsize=1)
def get_answer_key() -> Dict[str, List[str]]:
    """FastAPI dependency returning the active answer key."""

    if ANSWER_KEY_FILE is None:
        return DEFAULT_ANSWER_KEY
    logger.info("Loading answer key from %s", ANSWER_KEY_FILE)
    return load_answer_key(ANSWER_KEY_FILE)


__all__ = [
    "DEFAULT_ANSWER_KEY",
    "GradeResult",
    "QUESTION_IDS",
    "TOTAL_QUESTIONS",
    "get_answer_key",
    "grade_answers",
    "load_answer_key",
    "normalize_answer",
]
