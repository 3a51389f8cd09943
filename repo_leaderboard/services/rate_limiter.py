import asyncio

import structlog

from repo_leaderboard.core.config import settings
from repo_leaderboard.services.github_service import GitHubService

logger = structlog.get_logger()


class RateLimiter:
    """Pauses before a GitHub call when the remaining quota runs low."""

    def __init__(
        self,
        github: GitHubService,
        threshold: int | None = None,
        delay: float | None = None,
    ) -> None:
        self.github = github
        self.threshold = settings.github_rate_limit_threshold if threshold is None else threshold
        self.delay = settings.github_rate_limit_delay if delay is None else delay

    async def check(self) -> None:
        """Query the quota and sleep for the cooldown if it is at or below the threshold.

        Errors from the quota lookup propagate to the caller.
        """
        rate = await self.github.get_rate_limit()
        if rate.remaining <= self.threshold:
            logger.warning(
                "Approaching rate limit, pausing",
                remaining=rate.remaining,
                threshold=self.threshold,
                delay_seconds=self.delay,
            )
            await asyncio.sleep(self.delay)
