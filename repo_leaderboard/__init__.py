"""Weighted contributor leaderboard for a single GitHub repository."""

__version__ = "1.0.0"
