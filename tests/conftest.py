"""Pytest configuration and shared fixtures."""

import os

# Configure the environment before the application reads it at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
for _name in (
    "ANSWER_KEY_FILE",
    "STATIC_DIR",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "ADDITIONAL_ALLOWED_ORIGINS",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LEADERBOARD_DISPLAY_LIMIT",
):
    os.environ.pop(_name, None)

from typing import Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from quizboard.app import app  # noqa: E402
from quizboard.core.database import engine  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database() -> Iterator[None]:
    """Every test starts with empty tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session() -> Iterator[Session]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
