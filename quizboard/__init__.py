"""Quiz submission backend with a fastest-first-perfect leaderboard."""

__version__ = "0.1.0"
