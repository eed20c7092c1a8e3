"""Time helpers shared by models and services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC.

    Depending on the driver, stored datetimes may come back without tzinfo,
    so ordering keys go through here before comparing.
    """

    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_instant(raw: str) -> datetime:
    """Parse an ISO-8601 instant; a trailing ``Z`` is accepted."""

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_naive_utc(value).isoformat() + "Z"


__all__ = ["as_naive_utc", "as_utc", "isoformat_utc", "parse_instant", "utcnow"]
