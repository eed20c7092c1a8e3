"""Database model for quiz attempts."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Dict, Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Attempt(SQLModel, table=True):
    """One quiz submission. Rows are appended and never updated."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    email: str = ORMField(index=True)
    answers_json: str
    score: int
    perfect: bool = ORMField(default=False, index=True)
    elapsed_seconds: int
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    submitted_at: datetime = ORMField(default_factory=utcnow, index=True)

    @property
    def eligible(self) -> bool:
        return self.perfect

    @property
    def answers(self) -> Dict[str, str]:
        return json.loads(self.answers_json or "{}")


__all__ = ["Attempt"]
