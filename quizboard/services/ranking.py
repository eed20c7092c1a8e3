"""Fastest-first-perfect ranking over the attempt log.

Everything here is a pure function of the attempts handed in. Callers fetch
rows from storage and decide what to persist; nothing in this module touches
a session.

A participant (keyed by the exact email string) enters the ranking with their
*first* perfect attempt, ordered by submission time. Later perfect attempts
never replace it, even when they are faster. Ranked entries are ordered by
elapsed seconds, then by submission time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from ..core.time import as_naive_utc

UNRANKED = -1


class RankedRecord(Protocol):
    """Fields the ranking needs from an attempt row."""

    id: Optional[int]
    email: str
    perfect: bool
    elapsed_seconds: int
    submitted_at: datetime


@dataclass(frozen=True)
class RankResult:
    eligible: bool
    rank: Optional[int]
    total_perfect: int
    is_first_perfect: bool

    @property
    def ranked(self) -> bool:
        return self.rank is not None and self.rank != UNRANKED


@dataclass(frozen=True)
class Stats:
    total_submissions: int
    perfect_count: int
    avg_score: float
    avg_elapsed: float
    fastest_perfect_elapsed: Optional[int]


EMPTY_STATS = Stats(
    total_submissions=0,
    perfect_count=0,
    avg_score=0.0,
    avg_elapsed=0.0,
    fastest_perfect_elapsed=None,
)


def submission_key(record: RankedRecord) -> Tuple[datetime, int]:
    """Order in which attempts were submitted; the row id breaks exact ties."""

    return as_naive_utc(record.submitted_at), record.id or 0


def leaderboard_key(record: RankedRecord) -> Tuple[int, datetime, int]:
    return (record.elapsed_seconds, *submission_key(record))


def first_perfect_attempts(records: Iterable[RankedRecord]) -> Dict[str, RankedRecord]:
    """Map each email to its earliest-submitted perfect attempt."""

    firsts: Dict[str, RankedRecord] = {}
    for record in records:
        if not record.perfect:
            continue
        current = firsts.get(record.email)
        if current is None or submission_key(record) < submission_key(current):
            firsts[record.email] = record
    return firsts


def build_leaderboard(records: Iterable[RankedRecord], limit: int) -> List[RankedRecord]:
    """Return at most ``limit`` first-perfect attempts, fastest first."""

    if limit < 1:
        raise ValueError("limit must be a positive integer")
    firsts = first_perfect_attempts(records)
    return sorted(firsts.values(), key=leaderboard_key)[:limit]


def rank_for(elapsed_seconds: int, competitor_elapsed: Iterable[int]) -> int:
    """1 + the number of competitors strictly faster than ``elapsed_seconds``."""

    return 1 + sum(1 for other in competitor_elapsed if other < elapsed_seconds)


def rank_attempt(
    record: RankedRecord,
    first_perfects: Mapping[str, RankedRecord],
    *,
    is_first_perfect: bool,
) -> RankResult:
    """Feedback for a just-recorded attempt.

    ``first_perfects`` holds every participant's first perfect attempt as it
    stands after this attempt was stored. ``is_first_perfect`` comes from the
    store, which is the only place that can answer it race-free.
    """

    participants = set(first_perfects)
    if not record.perfect:
        return RankResult(
            eligible=False,
            rank=None,
            total_perfect=len(participants),
            is_first_perfect=False,
        )

    participants.add(record.email)
    if not is_first_perfect:
        rank = UNRANKED
    else:
        rank = rank_for(
            record.elapsed_seconds,
            (
                other.elapsed_seconds
                for email, other in first_perfects.items()
                if email != record.email
            ),
        )
    return RankResult(
        eligible=True,
        rank=rank,
        total_perfect=len(participants),
        is_first_perfect=is_first_perfect,
    )


__all__ = [
    "EMPTY_STATS",
    "RankResult",
    "RankedRecord",
    "Stats",
    "UNRANKED",
    "build_leaderboard",
    "first_perfect_attempts",
    "leaderboard_key",
    "rank_attempt",
    "rank_for",
    "submission_key",
]
