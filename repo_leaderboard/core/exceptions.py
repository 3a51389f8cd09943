"""Exception hierarchy for the leaderboard.

Everything raised on purpose inherits from LeaderboardError so callers have
a single catch point. No exception here is retried by the scoring code.
"""


class LeaderboardError(Exception):
    """Base exception for all leaderboard errors."""


class GitHubAPIError(LeaderboardError):
    """GitHub returned an error response or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class GitHubPayloadError(LeaderboardError):
    """A GitHub response did not match the expected shape."""
