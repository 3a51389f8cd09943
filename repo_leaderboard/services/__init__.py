from repo_leaderboard.services.contributor_service import ContributorService
from repo_leaderboard.services.github_service import GitHubService
from repo_leaderboard.services.leaderboard_service import (
    LeaderboardService,
    get_contributor_percentages,
)
from repo_leaderboard.services.maintainer_service import MaintainerService
from repo_leaderboard.services.pagination import fetch_all
from repo_leaderboard.services.rate_limiter import RateLimiter
from repo_leaderboard.services.scoring_service import SCORE_WEIGHTS, ContributorScores, EventType

__all__ = [
    "ContributorScores",
    "ContributorService",
    "EventType",
    "GitHubService",
    "LeaderboardService",
    "MaintainerService",
    "RateLimiter",
    "SCORE_WEIGHTS",
    "fetch_all",
    "get_contributor_percentages",
]
