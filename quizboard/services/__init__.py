"""Service layer helpers."""

from .attempts import get_statistics, list_leaderboard, record_attempt, reindex_claims
from .grader import get_answer_key, grade_answers
from .ranking import UNRANKED, RankResult, Stats, build_leaderboard, rank_attempt
from .submissions import build_attempt

__all__ = [
    "RankResult",
    "Stats",
    "UNRANKED",
    "build_attempt",
    "build_leaderboard",
    "get_answer_key",
    "get_statistics",
    "grade_answers",
    "list_leaderboard",
    "rank_attempt",
    "record_attempt",
    "reindex_claims",
]
