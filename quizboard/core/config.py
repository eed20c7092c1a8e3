"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    """Return an integer environment variable or raise on garbage."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}")
    return value


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw or not raw.strip():
        return None
    return Path(raw.strip())


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Storage --------------------------------------------------------------------
DEFAULT_DATABASE_PATH = _PROJECT_ROOT / "data" / "app.db"
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DEFAULT_DATABASE_PATH}"
DB_RESET = _env_bool("DB_RESET", False)


# CORS -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
# With nothing configured every origin is allowed.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

ALLOWED_CORS_ORIGINS = _unique([*_frontend_origins, *_additional_origins]) or ["*"]


# Leaderboard ----------------------------------------------------------------
LEADERBOARD_MAX_LIMIT = _env_int("LEADERBOARD_MAX_LIMIT", 100, minimum=1)
LEADERBOARD_DEFAULT_LIMIT = min(
    _env_int("LEADERBOARD_DEFAULT_LIMIT", 10, minimum=1), LEADERBOARD_MAX_LIMIT
)
LEADERBOARD_DISPLAY_LIMIT = _env_int("LEADERBOARD_DISPLAY_LIMIT", 3, minimum=1)


# Runtime behaviour ----------------------------------------------------------
ANSWER_KEY_FILE = _env_path("ANSWER_KEY_FILE")
STATIC_DIR = _env_path("STATIC_DIR")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = _env_int("PORT", 3000, minimum=1)


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "ANSWER_KEY_FILE",
    "DATABASE_URL",
    "DB_RESET",
    "DEFAULT_DATABASE_PATH",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_DISPLAY_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LOG_LEVEL",
    "PORT",
    "STATIC_DIR",
]
