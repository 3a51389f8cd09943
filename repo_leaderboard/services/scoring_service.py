from enum import Enum
from types import MappingProxyType

from repo_leaderboard.models.github import Reaction, ReactionContent
from repo_leaderboard.models.leaderboard import Contributor


class EventType(str, Enum):
    ISSUE_CREATED = "issue_created"
    ISSUE_COMMENT = "issue_comment"
    ISSUE_REACTION = "issue_reaction"
    PR_CREATED = "pr_created"
    PR_REVIEW = "pr_review"
    PR_COMMENT = "pr_comment"
    PR_REACTION = "pr_reaction"


SCORE_WEIGHTS = MappingProxyType(
    {
        EventType.ISSUE_CREATED: 10,
        EventType.ISSUE_COMMENT: 5,
        EventType.ISSUE_REACTION: 2,
        EventType.PR_CREATED: 20,
        EventType.PR_REVIEW: 15,
        EventType.PR_COMMENT: 10,
        EventType.PR_REACTION: 3,
    }
)

# Automation accounts that never earn or grant points
EXCLUDED_LOGINS = frozenset({"vercel[bot]", "socket-security[bot]"})
BOT_MARKER = "[bot]"

QUALIFYING_REACTIONS = frozenset(
    {ReactionContent.THUMBS_UP.value, ReactionContent.HEART.value, ReactionContent.HOORAY.value}
)


def should_exclude_login(login: str | None) -> bool:
    """Check if a login belongs to a bot or a deleted account."""
    if not login:
        return True
    return login in EXCLUDED_LOGINS or BOT_MARKER in login


def has_maintainer_veto(reactions: list[Reaction], maintainer_logins: set[str]) -> bool:
    """A thumbs-down from any maintainer vetoes the creation award."""
    return any(
        reaction.author_login in maintainer_logins
        and reaction.content == ReactionContent.THUMBS_DOWN.value
        for reaction in reactions
    )


def is_qualifying_reaction(reaction: Reaction) -> bool:
    return not should_exclude_login(reaction.author_login) and reaction.content in QUALIFYING_REACTIONS


def creation_event(is_pull_request: bool) -> EventType:
    return EventType.PR_CREATED if is_pull_request else EventType.ISSUE_CREATED


def comment_event(is_pull_request: bool) -> EventType:
    return EventType.PR_COMMENT if is_pull_request else EventType.ISSUE_COMMENT


def reaction_event(is_pull_request: bool) -> EventType:
    return EventType.PR_REACTION if is_pull_request else EventType.ISSUE_REACTION


class ContributorScores:
    """Running login -> score totals for a single leaderboard run."""

    def __init__(self) -> None:
        self._scores: dict[str, int] = {}

    def add(self, login: str, event_type: EventType) -> None:
        self._scores[login] = self._scores.get(login, 0) + SCORE_WEIGHTS[event_type]

    def get(self, login: str) -> int:
        return self._scores.get(login, 0)

    def as_dict(self) -> dict[str, int]:
        return dict(self._scores)

    def __contains__(self, login: object) -> bool:
        return login in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def ranked(self, top: int | None = None) -> list[Contributor]:
        """Contributors by descending score.

        The sort is stable, so equal scores keep the order in which each
        login first scored. ``top`` keeps only the highest entries.
        """
        contributors = sorted(
            (Contributor(login=login, score=score) for login, score in self._scores.items()),
            key=lambda c: c.score,
            reverse=True,
        )
        return contributors[:top] if top else contributors
