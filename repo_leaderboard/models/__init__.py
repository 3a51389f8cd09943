from repo_leaderboard.models.github import (
    Collaborator,
    GitHubUser,
    Issue,
    IssueComment,
    Permissions,
    RateLimit,
    Reaction,
    ReactionContent,
    RepositoryInfo,
    Review,
)
from repo_leaderboard.models.leaderboard import (
    Contributor,
    ContributorPercentage,
    Leaderboard,
    Maintainer,
    Role,
)

__all__ = [
    "Collaborator",
    "Contributor",
    "ContributorPercentage",
    "GitHubUser",
    "Issue",
    "IssueComment",
    "Leaderboard",
    "Maintainer",
    "Permissions",
    "RateLimit",
    "Reaction",
    "ReactionContent",
    "RepositoryInfo",
    "Review",
    "Role",
]
