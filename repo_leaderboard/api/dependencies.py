from collections.abc import AsyncGenerator

from fastapi import Depends

from repo_leaderboard.services.github_service import GitHubService
from repo_leaderboard.services.leaderboard_service import LeaderboardService


async def get_github_service() -> AsyncGenerator[GitHubService, None]:
    """Yield a GitHub client that lives for the duration of one request."""
    async with GitHubService() as github:
        yield github


def get_leaderboard_service(
    github: GitHubService = Depends(get_github_service),
) -> LeaderboardService:
    return LeaderboardService(github)
