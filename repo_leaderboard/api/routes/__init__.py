from fastapi import APIRouter

from repo_leaderboard.api.routes.leaderboard import router as leaderboard_router
from repo_leaderboard.api.routes.maintainers import router as maintainers_router

router = APIRouter()

router.include_router(leaderboard_router, prefix="/leaderboard", tags=["leaderboard"])
router.include_router(maintainers_router, prefix="/maintainers", tags=["maintainers"])
