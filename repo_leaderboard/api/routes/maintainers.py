from fastapi import APIRouter, Depends

from repo_leaderboard.api.dependencies import get_leaderboard_service
from repo_leaderboard.api.schemas.leaderboard import MaintainerEntry, MaintainerList
from repo_leaderboard.services.leaderboard_service import LeaderboardService

router = APIRouter()


@router.get(
    "/{owner}/{repo}",
    response_model=MaintainerList,
    summary="List repository maintainers",
)
async def list_maintainers(
    owner: str,
    repo: str,
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> MaintainerList:
    """List collaborators with push access and their roles."""
    maintainers = await service.get_maintainers(owner, repo)
    return MaintainerList(
        repository=f"{owner}/{repo}",
        maintainers=[MaintainerEntry.model_validate(m) for m in maintainers],
        total=len(maintainers),
    )
