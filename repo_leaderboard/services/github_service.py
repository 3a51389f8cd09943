from datetime import datetime
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from repo_leaderboard.core.config import settings
from repo_leaderboard.core.exceptions import GitHubAPIError, GitHubPayloadError
from repo_leaderboard.models.github import (
    Collaborator,
    Issue,
    IssueComment,
    RateLimit,
    Reaction,
    RepositoryInfo,
    Review,
)

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_since(since: str | datetime | None) -> str | None:
    """Render a since cutoff the way the issues endpoint expects it."""
    if since is None or isinstance(since, str):
        return since
    return since.isoformat().replace("+00:00", "Z")


class GitHubService:
    """Async client for the GitHub REST endpoints the leaderboard reads.

    Every listing method takes ``page`` and ``per_page`` so it can be drained
    by ``fetch_all``. Transport errors are retried only when
    ``max_attempts`` is above 1; HTTP error responses are never retried.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.github_api_base_url).rstrip("/")
        self.max_attempts = max_attempts or settings.github_max_attempts
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"repo-leaderboard/{settings.app_version}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        token = token if token is not None else settings.github_token
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=timeout or settings.github_timeout,
        )

    async def __aenter__(self) -> "GitHubService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict | None = None) -> Any:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("GitHub request failed", path=path, error=str(e))
            raise GitHubAPIError(f"Request to {self.base_url}{path} failed: {e}", url=path) from e

        if response.is_error:
            logger.error(
                "GitHub returned an error",
                path=path,
                status_code=response.status_code,
            )
            raise GitHubAPIError(
                f"GitHub returned {response.status_code} for {response.request.url}",
                status_code=response.status_code,
                url=str(response.request.url),
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubPayloadError(
                f"GitHub returned a non-JSON body for {response.request.url}"
            ) from e

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise GitHubPayloadError(f"Unexpected {model.__name__} payload: {e}") from e

    @classmethod
    def _parse_list(cls, model: type[ModelT], data: Any) -> list[ModelT]:
        if not isinstance(data, list):
            raise GitHubPayloadError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
        return [cls._parse(model, item) for item in data]

    async def get_rate_limit(self) -> RateLimit:
        """Check current rate limit status for the core REST quota."""
        data = await self._get("/rate_limit")
        core = None
        if isinstance(data, dict):
            core = data.get("resources", {}).get("core") or data.get("rate")
        return self._parse(RateLimit, core)

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Fetch repository metadata."""
        data = await self._get(f"/repos/{owner}/{repo}")
        return self._parse(RepositoryInfo, data)

    async def list_collaborators(
        self,
        owner: str,
        repo: str,
        affiliation: str = "all",
        page: int = 1,
        per_page: int = 100,
    ) -> list[Collaborator]:
        data = await self._get(
            f"/repos/{owner}/{repo}/collaborators",
            params={"affiliation": affiliation, "page": page, "per_page": per_page},
        )
        return self._parse_list(Collaborator, data)

    async def list_issues(
        self,
        owner: str,
        repo: str,
        since: str | datetime | None = None,
        state: str = "all",
        page: int = 1,
        per_page: int = 100,
    ) -> list[Issue]:
        """Fetch issues and pull requests updated at or after ``since``."""
        params: dict = {"state": state, "page": page, "per_page": per_page}
        if since:
            params["since"] = format_since(since)
        data = await self._get(f"/repos/{owner}/{repo}/issues", params=params)
        return self._parse_list(Issue, data)

    async def list_issue_comments(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        page: int = 1,
        per_page: int = 100,
    ) -> list[IssueComment]:
        data = await self._get(
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            params={"page": page, "per_page": per_page},
        )
        return self._parse_list(IssueComment, data)

    async def list_issue_reactions(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        page: int = 1,
        per_page: int = 100,
    ) -> list[Reaction]:
        data = await self._get(
            f"/repos/{owner}/{repo}/issues/{issue_number}/reactions",
            params={"page": page, "per_page": per_page},
        )
        return self._parse_list(Reaction, data)

    async def list_comment_reactions(
        self,
        owner: str,
        repo: str,
        comment_id: int,
        page: int = 1,
        per_page: int = 100,
    ) -> list[Reaction]:
        data = await self._get(
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}/reactions",
            params={"page": page, "per_page": per_page},
        )
        return self._parse_list(Reaction, data)

    async def list_pull_reviews(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        page: int = 1,
        per_page: int = 100,
    ) -> list[Review]:
        data = await self._get(
            f"/repos/{owner}/{repo}/pulls/{pull_number}/reviews",
            params={"page": page, "per_page": per_page},
        )
        return self._parse_list(Review, data)
