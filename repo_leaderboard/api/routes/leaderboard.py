from datetime import datetime

from fastapi import APIRouter, Depends, Query

from repo_leaderboard.api.dependencies import get_leaderboard_service
from repo_leaderboard.api.schemas.leaderboard import (
    ContributorEntry,
    LeaderboardResponse,
    MaintainerEntry,
)
from repo_leaderboard.services.leaderboard_service import LeaderboardService

router = APIRouter()


@router.get(
    "/{owner}/{repo}",
    response_model=LeaderboardResponse,
    summary="Get repository leaderboard",
)
async def get_repository_leaderboard(
    owner: str,
    repo: str,
    since: datetime | None = Query(None, description="Only count activity at or after this time"),
    top: int | None = Query(None, ge=1),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """Score every contributor of a repository and return their shares."""
    leaderboard = await service.get_leaderboard(owner, repo, since=since, top=top)
    return LeaderboardResponse(
        repository=f"{owner}/{repo}",
        since=leaderboard.since,
        maintainers=[MaintainerEntry.model_validate(m) for m in leaderboard.maintainers],
        entries=[
            ContributorEntry(
                rank=rank,
                login=c.login,
                score=c.score,
                percentage=c.percentage,
            )
            for rank, c in enumerate(leaderboard.contributors, start=1)
        ],
        total=len(leaderboard.contributors),
        total_percentage=leaderboard.total_percentage,
    )
