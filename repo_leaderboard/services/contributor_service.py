import asyncio
from datetime import datetime

import structlog

from repo_leaderboard.models.github import Issue, IssueComment, Reaction, Review
from repo_leaderboard.models.leaderboard import Contributor
from repo_leaderboard.services.github_service import GitHubService, format_since
from repo_leaderboard.services.maintainer_service import MaintainerService
from repo_leaderboard.services.pagination import fetch_all
from repo_leaderboard.services.rate_limiter import RateLimiter
from repo_leaderboard.services.scoring_service import (
    ContributorScores,
    EventType,
    comment_event,
    creation_event,
    has_maintainer_veto,
    is_qualifying_reaction,
    reaction_event,
    should_exclude_login,
)

logger = structlog.get_logger()


class ContributorService:
    """Walks a repository's issues and pull requests and scores every contributor."""

    def __init__(
        self,
        github: GitHubService,
        rate_limiter: RateLimiter,
        maintainer_service: MaintainerService | None = None,
    ) -> None:
        self.github = github
        self.rate_limiter = rate_limiter
        self.maintainer_service = maintainer_service or MaintainerService(github, rate_limiter)

    async def get_contributor_scores(
        self,
        owner: str,
        repo: str,
        since: str | datetime | None = None,
        top: int | None = None,
        maintainer_logins: set[str] | None = None,
    ) -> list[Contributor]:
        """Score all activity since ``since`` and rank contributors.

        Without ``since`` the repository's creation time is used. Without
        ``maintainer_logins`` the maintainers are resolved first, since
        their thumbs-down reactions veto creation awards.
        """
        if maintainer_logins is None:
            maintainers = await self.maintainer_service.get_maintainers(owner, repo)
            maintainer_logins = {m.login for m in maintainers}

        since = await self.resolve_since(owner, repo, since)

        scores = ContributorScores()
        await self.process_issues_and_pull_requests(scores, maintainer_logins, owner, repo, since)

        logger.info(
            "Scored contributors",
            repository=f"{owner}/{repo}",
            since=since,
            contributors=len(scores),
        )
        return scores.ranked(top)

    async def resolve_since(self, owner: str, repo: str, since: str | datetime | None) -> str:
        """Return the effective cutoff, falling back to the repository's creation time."""
        if since:
            return format_since(since)
        await self.rate_limiter.check()
        repository = await self.github.get_repository(owner, repo)
        return format_since(repository.created_at)

    async def process_issues_and_pull_requests(
        self,
        scores: ContributorScores,
        maintainer_logins: set[str],
        owner: str,
        repo: str,
        since: str | None,
    ) -> None:
        issues = await fetch_all(
            self.github.list_issues,
            self.rate_limiter,
            owner=owner,
            repo=repo,
            state="all",
            since=since,
        )
        for item in issues:
            await self._process_item(scores, maintainer_logins, owner, repo, item)

    async def _process_item(
        self,
        scores: ContributorScores,
        maintainer_logins: set[str],
        owner: str,
        repo: str,
        item: Issue,
    ) -> None:
        author = item.author_login
        if should_exclude_login(author):
            return

        try:
            async with asyncio.TaskGroup() as tg:
                reactions_task = tg.create_task(
                    fetch_all(
                        self.github.list_issue_reactions,
                        self.rate_limiter,
                        owner=owner,
                        repo=repo,
                        issue_number=item.number,
                    )
                )
                comments_task = tg.create_task(
                    fetch_all(
                        self.github.list_issue_comments,
                        self.rate_limiter,
                        owner=owner,
                        repo=repo,
                        issue_number=item.number,
                    )
                )
        except ExceptionGroup as eg:
            # The sibling fetch is cancelled; surface the first failure as-is
            raise eg.exceptions[0] from eg
        reactions = reactions_task.result()
        comments = comments_task.result()

        vetoed = has_maintainer_veto(reactions, maintainer_logins)
        if not vetoed:
            scores.add(author, creation_event(item.is_pull_request))

        await self._process_comments(
            scores, comments, item.is_pull_request, maintainer_logins, owner, repo
        )
        self._process_reactions(scores, reactions, author, item.is_pull_request)

        if item.is_pull_request:
            reviews = await fetch_all(
                self.github.list_pull_reviews,
                self.rate_limiter,
                owner=owner,
                repo=repo,
                pull_number=item.number,
            )
            self._process_reviews(scores, reviews)

        logger.debug(
            "Processed item",
            number=item.number,
            pull_request=item.is_pull_request,
            author=author,
            vetoed=vetoed,
            comments=len(comments),
            reactions=len(reactions),
        )

    async def _process_comments(
        self,
        scores: ContributorScores,
        comments: list[IssueComment],
        is_pull_request: bool,
        maintainer_logins: set[str],
        owner: str,
        repo: str,
    ) -> None:
        for comment in comments:
            author = comment.author_login
            if should_exclude_login(author):
                continue

            reactions = await fetch_all(
                self.github.list_comment_reactions,
                self.rate_limiter,
                owner=owner,
                repo=repo,
                comment_id=comment.id,
            )

            if not has_maintainer_veto(reactions, maintainer_logins):
                scores.add(author, comment_event(is_pull_request))

            self._process_reactions(scores, reactions, author, is_pull_request)

    @staticmethod
    def _process_reactions(
        scores: ContributorScores,
        reactions: list[Reaction],
        item_creator: str,
        is_pull_request: bool,
    ) -> None:
        # Reactions reward the author of what was reacted to, never the reactor
        for reaction in reactions:
            if is_qualifying_reaction(reaction):
                scores.add(item_creator, reaction_event(is_pull_request))

    @staticmethod
    def _process_reviews(scores: ContributorScores, reviews: list[Review]) -> None:
        for review in reviews:
            if not should_exclude_login(review.author_login):
                scores.add(review.author_login, EventType.PR_REVIEW)
