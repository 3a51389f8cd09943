import structlog

from repo_leaderboard.models.github import Collaborator, Permissions
from repo_leaderboard.models.leaderboard import Maintainer, Role
from repo_leaderboard.services.github_service import GitHubService
from repo_leaderboard.services.pagination import fetch_all
from repo_leaderboard.services.rate_limiter import RateLimiter

logger = structlog.get_logger()


def determine_role(permissions: Permissions | None) -> str:
    """Map permission flags to a role label, highest privilege first."""
    if permissions is None:
        return Role.CONTRIBUTOR.value
    if permissions.admin:
        return Role.ADMIN.value
    if permissions.maintain:
        return Role.MAINTAINER.value
    if permissions.push:
        return Role.COLLABORATOR.value
    return Role.CONTRIBUTOR.value


def to_maintainer(collaborator: Collaborator) -> Maintainer:
    return Maintainer(
        login=collaborator.login,
        avatar_url=collaborator.avatar_url,
        html_url=collaborator.html_url,
        role=collaborator.role_name or determine_role(collaborator.permissions),
    )


class MaintainerService:
    """Resolves the collaborators with push access to a repository."""

    def __init__(self, github: GitHubService, rate_limiter: RateLimiter) -> None:
        self.github = github
        self.rate_limiter = rate_limiter

    async def get_maintainers(self, owner: str, repo: str) -> list[Maintainer]:
        collaborators = await fetch_all(
            self.github.list_collaborators,
            self.rate_limiter,
            owner=owner,
            repo=repo,
            affiliation="all",
        )
        maintainers = [
            to_maintainer(collaborator)
            for collaborator in collaborators
            if collaborator.permissions and collaborator.permissions.push
        ]
        logger.info(
            "Resolved maintainers",
            repository=f"{owner}/{repo}",
            collaborators=len(collaborators),
            maintainers=len(maintainers),
        )
        return maintainers
