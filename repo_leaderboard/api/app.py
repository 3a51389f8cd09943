from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from repo_leaderboard.api.routes import router as api_router
from repo_leaderboard.core.config import settings
from repo_leaderboard.core.exceptions import GitHubAPIError, LeaderboardError
from repo_leaderboard.core.logging import configure_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Weighted contributor leaderboard for GitHub repositories",
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.exception_handler(LeaderboardError)
    async def leaderboard_error_handler(request: Request, exc: LeaderboardError) -> JSONResponse:
        if isinstance(exc, GitHubAPIError) and exc.status_code == status.HTTP_404_NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()
