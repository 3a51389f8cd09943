from collections.abc import Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

import structlog

from repo_leaderboard.models.leaderboard import (
    Contributor,
    ContributorPercentage,
    Leaderboard,
    Maintainer,
)
from repo_leaderboard.services.contributor_service import ContributorService
from repo_leaderboard.services.github_service import GitHubService
from repo_leaderboard.services.maintainer_service import MaintainerService
from repo_leaderboard.services.rate_limiter import RateLimiter

logger = structlog.get_logger()

HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def get_contributor_percentages(
    contributors: Sequence[Contributor],
) -> list[ContributorPercentage]:
    """Convert raw scores into two-decimal percentages summing to exactly 100.

    Each share is rounded half-up, then the rounding residual is applied from
    the first entry onward. A negative residual larger than an entry's share
    takes that share to 0.00 and carries the rest to the next entry, so no
    share is ever negative. When every score is zero all shares are 0.00 and no residual
    is applied.
    """
    total_score = sum(c.score for c in contributors)
    if total_score == 0:
        return [
            ContributorPercentage(login=c.login, score=c.score, percentage=Decimal("0.00"))
            for c in contributors
        ]

    percentages = [
        ContributorPercentage(
            login=c.login,
            score=c.score,
            percentage=_round(Decimal(c.score) / Decimal(total_score) * HUNDRED),
        )
        for c in contributors
    ]

    total_percentage = sum((p.percentage for p in percentages), Decimal("0"))
    residual = HUNDRED - total_percentage
    for p in percentages:
        if residual == 0:
            break
        adjustment = max(residual, -p.percentage)
        p.percentage = _round(p.percentage + adjustment)
        residual -= adjustment

    return percentages


class LeaderboardService:
    """Builds the full leaderboard for a repository: maintainers, scores and shares."""

    def __init__(self, github: GitHubService, rate_limiter: RateLimiter | None = None) -> None:
        self.github = github
        self.rate_limiter = rate_limiter or RateLimiter(github)
        self.maintainer_service = MaintainerService(github, self.rate_limiter)
        self.contributor_service = ContributorService(
            github, self.rate_limiter, self.maintainer_service
        )

    async def get_maintainers(self, owner: str, repo: str) -> list[Maintainer]:
        return await self.maintainer_service.get_maintainers(owner, repo)

    async def get_leaderboard(
        self,
        owner: str,
        repo: str,
        since: str | datetime | None = None,
        top: int | None = None,
        maintainers: list[Maintainer] | None = None,
    ) -> Leaderboard:
        """Compute the leaderboard, resolving maintainers unless they are supplied."""
        if maintainers is None:
            maintainers = await self.get_maintainers(owner, repo)

        since = await self.contributor_service.resolve_since(owner, repo, since)
        contributors = await self.contributor_service.get_contributor_scores(
            owner,
            repo,
            since=since,
            top=top,
            maintainer_logins={m.login for m in maintainers},
        )
        percentages = get_contributor_percentages(contributors)
        total_percentage = sum((p.percentage for p in percentages), Decimal("0"))

        logger.info(
            "Built leaderboard",
            repository=f"{owner}/{repo}",
            contributors=len(percentages),
            total_percentage=str(total_percentage),
        )
        return Leaderboard(
            owner=owner,
            repo=repo,
            since=since,
            maintainers=maintainers,
            contributors=percentages,
            total_percentage=total_percentage,
        )
