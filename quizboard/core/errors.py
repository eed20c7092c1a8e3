"""Domain exceptions raised by the service layer."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz backend failures."""

    status_code = 500
    public_message = "Internal error"


class AttemptValidationError(QuizError):
    """Submission payload is malformed and never reaches the ranking logic."""

    status_code = 400

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class StorageUnavailable(QuizError):
    """The attempt log could not be read or written."""

    status_code = 503
    public_message = "Failed to save quiz, please retry"


class DuplicateSubmissionRace(QuizError):
    """A first-perfect claim collided but no winning claim could be found."""

    status_code = 500
    public_message = "Failed to save quiz, please retry"

    def __init__(self, email: str) -> None:
        super().__init__(f"first-perfect claim for {email!r} collided without a winner")
        self.email = email


__all__ = [
    "AttemptValidationError",
    "DuplicateSubmissionRace",
    "QuizError",
    "StorageUnavailable",
]
