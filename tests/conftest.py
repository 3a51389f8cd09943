"""Test configuration and fixtures.

FakeGitHub stands in for GitHubService: it serves in-memory payloads with
the same page/per_page slicing GitHub applies and records every listing call.
"""

from collections import defaultdict
from datetime import UTC, datetime

import pytest

from repo_leaderboard.models.github import (
    Collaborator,
    Issue,
    IssueComment,
    RateLimit,
    Reaction,
    RepositoryInfo,
    Review,
)
from repo_leaderboard.services.rate_limiter import RateLimiter


def pytest_configure(config):
    """Register integration test marker."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test exercising the HTTP API"
    )


def _user(login: str | None) -> dict | None:
    return {"login": login} if login is not None else None


class FakeGitHub:
    def __init__(self) -> None:
        self.remaining = 5000
        self.repository = RepositoryInfo(
            full_name="acme/widgets",
            created_at=datetime(2023, 1, 15, tzinfo=UTC),
        )
        self.collaborators: list[Collaborator] = []
        self.issues: list[Issue] = []
        self.comments: dict[int, list[IssueComment]] = defaultdict(list)
        self.issue_reactions: dict[int, list[Reaction]] = defaultdict(list)
        self.comment_reactions: dict[int, list[Reaction]] = defaultdict(list)
        self.reviews: dict[int, list[Review]] = defaultdict(list)
        self.calls: list[tuple[str, dict]] = []

    # Builders

    def add_collaborator(self, login: str, role_name: str | None = None, **permissions: bool) -> None:
        self.collaborators.append(
            Collaborator.model_validate(
                {
                    "login": login,
                    "avatar_url": f"https://avatars.example/{login}",
                    "html_url": f"https://github.com/{login}",
                    "permissions": permissions,
                    "role_name": role_name,
                }
            )
        )

    def add_issue(self, number: int, login: str | None, pull_request: bool = False) -> None:
        self.issues.append(
            Issue.model_validate(
                {
                    "number": number,
                    "user": _user(login),
                    "pull_request": {"url": f"https://api.github.com/pulls/{number}"} if pull_request else None,
                    "created_at": "2024-03-01T12:00:00Z",
                }
            )
        )

    def add_comment(self, issue_number: int, comment_id: int, login: str | None) -> None:
        self.comments[issue_number].append(
            IssueComment.model_validate({"id": comment_id, "user": _user(login)})
        )

    def add_issue_reaction(self, issue_number: int, login: str | None, content: str) -> None:
        self.issue_reactions[issue_number].append(
            Reaction.model_validate({"user": _user(login), "content": content})
        )

    def add_comment_reaction(self, comment_id: int, login: str | None, content: str) -> None:
        self.comment_reactions[comment_id].append(
            Reaction.model_validate({"user": _user(login), "content": content})
        )

    def add_review(self, pull_number: int, login: str | None) -> None:
        self.reviews[pull_number].append(Review.model_validate({"user": _user(login)}))

    # GitHubService surface

    def _page(self, name: str, items: list, page: int, per_page: int, **params) -> list:
        self.calls.append((name, {**params, "page": page, "per_page": per_page}))
        return items[(page - 1) * per_page : page * per_page]

    def calls_to(self, name: str) -> list[dict]:
        return [params for called, params in self.calls if called == name]

    async def get_rate_limit(self) -> RateLimit:
        return RateLimit(limit=5000, remaining=self.remaining, reset=0)

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        self.calls.append(("get_repository", {"owner": owner, "repo": repo}))
        return self.repository

    async def list_collaborators(self, owner, repo, affiliation="all", page=1, per_page=100):
        return self._page(
            "list_collaborators", self.collaborators, page, per_page, affiliation=affiliation
        )

    async def list_issues(self, owner, repo, since=None, state="all", page=1, per_page=100):
        return self._page("list_issues", self.issues, page, per_page, since=since, state=state)

    async def list_issue_comments(self, owner, repo, issue_number, page=1, per_page=100):
        return self._page(
            "list_issue_comments", self.comments[issue_number], page, per_page,
            issue_number=issue_number,
        )

    async def list_issue_reactions(self, owner, repo, issue_number, page=1, per_page=100):
        return self._page(
            "list_issue_reactions", self.issue_reactions[issue_number], page, per_page,
            issue_number=issue_number,
        )

    async def list_comment_reactions(self, owner, repo, comment_id, page=1, per_page=100):
        return self._page(
            "list_comment_reactions", self.comment_reactions[comment_id], page, per_page,
            comment_id=comment_id,
        )

    async def list_pull_reviews(self, owner, repo, pull_number, page=1, per_page=100):
        return self._page(
            "list_pull_reviews", self.reviews[pull_number], page, per_page,
            pull_number=pull_number,
        )


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def rate_limiter(fake_github: FakeGitHub) -> RateLimiter:
    return RateLimiter(fake_github, threshold=100, delay=60)
