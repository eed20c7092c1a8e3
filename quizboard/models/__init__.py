"""Database model exports."""

from .attempt import Attempt
from .claim import PerfectClaim

__all__ = [
    "Attempt",
    "PerfectClaim",
]
