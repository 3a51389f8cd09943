"""Typed records for the GitHub REST payloads the leaderboard reads.

Only the fields used for scoring are declared; anything else GitHub sends is
ignored. ``user`` is required on every actor-bearing record but may be
``null`` for deleted ("ghost") accounts.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class GitHubModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitHubUser(GitHubModel):
    login: str


class ReactionContent(str, Enum):
    THUMBS_UP = "+1"
    THUMBS_DOWN = "-1"
    LAUGH = "laugh"
    CONFUSED = "confused"
    HEART = "heart"
    HOORAY = "hooray"
    ROCKET = "rocket"
    EYES = "eyes"


class Issue(GitHubModel):
    """An issue or pull request as returned by the issues listing."""

    number: int
    user: GitHubUser | None
    pull_request: dict | None = None
    created_at: datetime

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def author_login(self) -> str | None:
        return self.user.login if self.user else None


class IssueComment(GitHubModel):
    id: int
    user: GitHubUser | None

    @property
    def author_login(self) -> str | None:
        return self.user.login if self.user else None


class Reaction(GitHubModel):
    user: GitHubUser | None
    content: str  # Kinds outside ReactionContent are kept and never score

    @property
    def author_login(self) -> str | None:
        return self.user.login if self.user else None


class Review(GitHubModel):
    user: GitHubUser | None

    @property
    def author_login(self) -> str | None:
        return self.user.login if self.user else None


class Permissions(GitHubModel):
    admin: bool = False
    maintain: bool = False
    push: bool = False
    triage: bool = False
    pull: bool = False


class Collaborator(GitHubModel):
    login: str
    avatar_url: str = ""
    html_url: str = ""
    permissions: Permissions | None = None
    role_name: str | None = None


class RepositoryInfo(GitHubModel):
    full_name: str
    created_at: datetime


class RateLimit(GitHubModel):
    limit: int
    remaining: int
    reset: int
