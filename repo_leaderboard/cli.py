"""Command line entry point: print the leaderboard for one repository.

Defaults come from the environment (GITHUB_OWNER, GITHUB_REPO, GITHUB_SINCE,
GITHUB_TOP, GITHUB_TOKEN) and can be overridden with flags.
"""

import argparse
import asyncio
import sys
from datetime import datetime

import structlog

from repo_leaderboard.core.config import settings
from repo_leaderboard.core.exceptions import LeaderboardError
from repo_leaderboard.core.logging import configure_logging
from repo_leaderboard.report import format_contributors, format_maintainers
from repo_leaderboard.services.github_service import GitHubService
from repo_leaderboard.services.leaderboard_service import LeaderboardService

logger = structlog.get_logger()


def _parse_since(value: str) -> str:
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value}") from e
    return value


def _parse_top(value: str) -> int:
    try:
        top = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from e
    if top < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return top


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-leaderboard",
        description="Compute a weighted contributor leaderboard for a GitHub repository",
    )
    parser.add_argument("--owner", default=settings.github_owner, help="Repository owner")
    parser.add_argument("--repo", default=settings.github_repo, help="Repository name")
    parser.add_argument(
        "--since",
        type=_parse_since,
        default=settings.github_since,
        help="Only count activity at or after this ISO-8601 timestamp (default: repository creation)",
    )
    parser.add_argument(
        "--top",
        type=_parse_top,
        default=settings.github_top,
        help="Only report the N highest scoring contributors",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the leaderboard as JSON instead of text",
    )
    return parser


async def run(owner: str, repo: str, since: str | None, top: int | None, as_json: bool) -> None:
    print(f"Fetching data for {owner}/{repo}{f' since {since}' if since else ''}", file=sys.stderr)

    async with GitHubService() as github:
        service = LeaderboardService(github)

        maintainers = await service.get_maintainers(owner, repo)
        if not as_json:
            print(format_maintainers(maintainers))

        leaderboard = await service.get_leaderboard(
            owner, repo, since=since, top=top, maintainers=maintainers
        )

    if as_json:
        print(leaderboard.model_dump_json(indent=2))
    else:
        print()
        print("\n".join(format_contributors(leaderboard.contributors)))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level, settings.log_json)

    try:
        asyncio.run(run(args.owner, args.repo, args.since, args.top, args.json))
    except LeaderboardError as e:
        logger.error("Leaderboard run failed", owner=args.owner, repo=args.repo, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
