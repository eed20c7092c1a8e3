"""Attempt log operations: record, leaderboard, statistics."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List

from sqlalchemy import case, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, func, select

from ..core.errors import DuplicateSubmissionRace, QuizError, StorageUnavailable
from ..core.time import utcnow
from ..models import Attempt, PerfectClaim
from .ranking import (
    EMPTY_STATS,
    RankResult,
    Stats,
    build_leaderboard,
    first_perfect_attempts,
    rank_attempt,
)

logger = logging.getLogger(__name__)


@contextmanager
def _storage_guard(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise storage failures as StorageUnavailable."""

    try:
        yield
    except QuizError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure while %s", action)
        raise StorageUnavailable(f"storage failure while {action}") from exc


def _claim_first_perfect(session: Session, attempt: Attempt) -> bool:
    """Try to make ``attempt`` its participant's first perfect attempt.

    Returns False when another attempt already holds the claim. The insert
    runs in a SAVEPOINT so a collision leaves the attempt row in place.
    """

    try:
        with session.begin_nested():
            session.connection().execute(
                insert(PerfectClaim).values(
                    email=attempt.email, attempt_id=attempt.id, claimed_at=utcnow()
                )
            )
    except IntegrityError:
        holder = session.get(PerfectClaim, attempt.email)
        if holder is None:
            raise DuplicateSubmissionRace(attempt.email)
        logger.info(
            "Perfect attempt %s for %s is not first (claim held by attempt %s)",
            attempt.id,
            attempt.email,
            holder.attempt_id,
        )
        return False
    return True


def _first_perfects(session: Session) -> Dict[str, Attempt]:
    rows = session.exec(
        select(PerfectClaim, Attempt).join(Attempt, Attempt.id == PerfectClaim.attempt_id)
    ).all()
    return {claim.email: attempt for claim, attempt in rows}


def record_attempt(session: Session, attempt: Attempt) -> RankResult:
    """Append ``attempt`` to the log and report its ranking.

    The attempt row and its first-perfect claim commit together or not at all.
    The submission time is stamped here, immediately before the insert.
    """

    with _storage_guard(session, "recording attempt"):
        attempt.submitted_at = utcnow()
        session.add(attempt)
        session.flush()
        is_first = attempt.perfect and _claim_first_perfect(session, attempt)
        result = rank_attempt(attempt, _first_perfects(session), is_first_perfect=is_first)
        session.commit()
        session.refresh(attempt)

    logger.info(
        "Quiz submitted: %s <%s> score=%s/7 time=%ss perfect=%s rank=%s",
        attempt.name,
        attempt.email,
        attempt.score,
        attempt.elapsed_seconds,
        attempt.perfect,
        result.rank,
    )
    return result


def list_leaderboard(session: Session, limit: int) -> List[Attempt]:
    """First perfect attempt per participant, fastest first, at most ``limit``."""

    with _storage_guard(session, "reading leaderboard"):
        firsts = list(_first_perfects(session).values())
    return build_leaderboard(firsts, limit)


def get_statistics(session: Session) -> Stats:
    """Descriptive rollup over every attempt in the log."""

    is_perfect = Attempt.perfect == True  # noqa: E712
    with _storage_guard(session, "reading statistics"):
        total, perfect, avg_score, avg_elapsed, fastest = session.exec(
            select(
                func.count(Attempt.id),
                func.sum(case((is_perfect, 1), else_=0)),
                func.avg(Attempt.score),
                func.avg(Attempt.elapsed_seconds),
                func.min(case((is_perfect, Attempt.elapsed_seconds), else_=None)),
            )
        ).one()

    if not total:
        return EMPTY_STATS
    return Stats(
        total_submissions=int(total),
        perfect_count=int(perfect or 0),
        avg_score=float(avg_score or 0),
        avg_elapsed=float(avg_elapsed or 0),
        fastest_perfect_elapsed=int(fastest) if fastest is not None else None,
    )


def reindex_claims(session: Session) -> int:
    """Add missing first-perfect claims for attempts already in the log.

    Used at startup so a log imported without claims ranks correctly. Existing
    claims are left untouched.
    """

    with _storage_guard(session, "reindexing claims"):
        claimed = set(session.exec(select(PerfectClaim.email)).all())
        perfect_rows = session.exec(
            select(Attempt).where(Attempt.perfect == True)  # noqa: E712
        ).all()
        missing = [
            attempt
            for email, attempt in first_perfect_attempts(perfect_rows).items()
            if email not in claimed
        ]
        for attempt in missing:
            session.connection().execute(
                insert(PerfectClaim).values(
                    email=attempt.email, attempt_id=attempt.id, claimed_at=utcnow()
                )
            )
        session.commit()

    if missing:
        logger.info("Backfilled %d first-perfect claims", len(missing))
    return len(missing)


__all__ = [
    "get_statistics",
    "list_leaderboard",
    "record_attempt",
    "reindex_claims",
]
