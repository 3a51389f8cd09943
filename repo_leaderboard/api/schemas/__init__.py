from repo_leaderboard.api.schemas.leaderboard import (
    ContributorEntry,
    LeaderboardResponse,
    MaintainerEntry,
    MaintainerList,
)

__all__ = [
    "ContributorEntry",
    "LeaderboardResponse",
    "MaintainerEntry",
    "MaintainerList",
]
