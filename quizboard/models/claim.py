"""Database model for first-perfect claims."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class PerfectClaim(SQLModel, table=True):
    """Points a participant's email at their first perfect attempt.

    The email primary key is what makes concurrent first submissions safe:
    only one insert per email can ever commit.
    """

    __tablename__ = "perfect_claim"

    email: str = ORMField(primary_key=True)
    attempt_id: int = ORMField(foreign_key="attempt.id", unique=True)
    claimed_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["PerfectClaim"]
