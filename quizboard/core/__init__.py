"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    ANSWER_KEY_FILE,
    DATABASE_URL,
    DB_RESET,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_DISPLAY_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    LOG_LEVEL,
    PORT,
    STATIC_DIR,
)
from .database import engine, get_session
from .errors import (
    AttemptValidationError,
    DuplicateSubmissionRace,
    QuizError,
    StorageUnavailable,
)
from .time import as_naive_utc, as_utc, isoformat_utc, parse_instant, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "ANSWER_KEY_FILE",
    "DATABASE_URL",
    "DB_RESET",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_DISPLAY_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LOG_LEVEL",
    "PORT",
    "STATIC_DIR",
    "AttemptValidationError",
    "DuplicateSubmissionRace",
    "QuizError",
    "StorageUnavailable",
    "as_naive_utc",
    "as_utc",
    "engine",
    "get_session",
    "isoformat_utc",
    "parse_instant",
    "utcnow",
]
