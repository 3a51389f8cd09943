"""Plain-text rendering of a leaderboard."""

from collections.abc import Sequence
from decimal import Decimal

from repo_leaderboard.models.leaderboard import ContributorPercentage, Maintainer


def format_maintainers(maintainers: Sequence[Maintainer]) -> str:
    return f"Maintainers: {', '.join(m.login for m in maintainers)}"


def format_contributors(percentages: Sequence[ContributorPercentage]) -> list[str]:
    lines = ["Contributor Scores and Percentages:"]
    total_percentage = Decimal("0")
    for contributor in percentages:
        lines.append(
            f"{contributor.login}: Score {contributor.score}, "
            f"Percentage {contributor.percentage:.2f}%"
        )
        total_percentage += contributor.percentage
    lines.append(f"Total Percentage: {total_percentage:.2f}%")
    return lines
