import json
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from repo_leaderboard.models.leaderboard import Contributor, Leaderboard, Maintainer
from repo_leaderboard.services.leaderboard_service import (
    LeaderboardService,
    get_contributor_percentages,
)
from repo_leaderboard.services.rate_limiter import RateLimiter


def _contributors(*scores: int) -> list[Contributor]:
    return [Contributor(login=f"user{i}", score=s) for i, s in enumerate(scores)]


class TestContributorPercentages:
    """Tests for percentage normalization."""

    def test_two_contributors(self) -> None:
        result = get_contributor_percentages(
            [Contributor(login="creator", score=12), Contributor(login="commenter", score=5)]
        )

        assert [p.percentage for p in result] == [Decimal("70.59"), Decimal("29.41")]
        assert [p.score for p in result] == [12, 5]

    @pytest.mark.parametrize(
        "scores",
        [
            (1, 1, 1),
            (2, 2, 2, 2, 2, 2, 2),
            (10, 5, 3, 3, 2),
            (97, 1, 1, 1),
            (1,) * 11,
            (20, 15, 15, 10, 7, 5, 3, 2),
            (1,) * 150,
            (2,) * 180,
            (1,) * 300,
            (5,) + (1,) * 400,
        ],
    )
    def test_sum_is_exactly_100(self, scores: tuple[int, ...]) -> None:
        result = get_contributor_percentages(_contributors(*scores))
        assert sum(p.percentage for p in result) == Decimal("100.00")
        assert all(p.percentage >= 0 for p in result)

    def test_residual_goes_to_first_entry(self) -> None:
        result = get_contributor_percentages(_contributors(1, 1, 1))

        # 33.33 * 3 = 99.99, the missing 0.01 lands on the first entry
        assert [p.percentage for p in result] == [
            Decimal("33.34"),
            Decimal("33.33"),
            Decimal("33.33"),
        ]

    def test_negative_residual_never_drives_a_share_below_zero(self) -> None:
        # 180 equal scores round to 0.56 each, 100.80 in total. The first
        # share absorbs what it can and the rest carries to the next entry.
        result = get_contributor_percentages(_contributors(*([2] * 180)))

        assert result[0].percentage == Decimal("0.00")
        assert result[1].percentage == Decimal("0.32")
        assert all(p.percentage == Decimal("0.56") for p in result[2:])
        assert sum(p.percentage for p in result) == Decimal("100.00")

    def test_large_positive_residual_stays_on_first_entry(self) -> None:
        # 300 shares of 0.33 leave 1.00 unassigned
        result = get_contributor_percentages(_contributors(*([1] * 300)))

        assert result[0].percentage == Decimal("1.33")
        assert all(p.percentage == Decimal("0.33") for p in result[1:])

    def test_rounds_half_up(self) -> None:
        # 1/8 = 12.5% exactly, 1/16 = 6.25%, 1/32 = 3.125% -> 3.13
        result = get_contributor_percentages(_contributors(16, 8, 4, 2, 1, 1))
        assert result[4].percentage == Decimal("3.13")

    def test_single_contributor(self) -> None:
        result = get_contributor_percentages(_contributors(42))
        assert result[0].percentage == Decimal("100.00")

    def test_empty(self) -> None:
        assert get_contributor_percentages([]) == []

    def test_all_zero_scores(self) -> None:
        result = get_contributor_percentages(_contributors(0, 0))
        assert [p.percentage for p in result] == [Decimal("0.00"), Decimal("0.00")]


class TestLeaderboardService:
    @pytest.mark.asyncio
    async def test_get_leaderboard(self, fake_github) -> None:
        fake_github.add_collaborator("maint", push=True)
        fake_github.add_issue(1, "creator")
        fake_github.add_issue_reaction(1, "fan", "+1")
        fake_github.add_comment(1, 100, "commenter")

        service = LeaderboardService(fake_github, RateLimiter(fake_github))
        leaderboard = await service.get_leaderboard("acme", "widgets", since="2024-01-01T00:00:00Z")

        assert [m.login for m in leaderboard.maintainers] == ["maint"]
        assert [(c.login, c.score, c.percentage) for c in leaderboard.contributors] == [
            ("creator", 12, Decimal("70.59")),
            ("commenter", 5, Decimal("29.41")),
        ]
        assert leaderboard.total_percentage == Decimal("100.00")
        assert leaderboard.since == "2024-01-01T00:00:00Z"

    @pytest.mark.asyncio
    async def test_since_defaults_to_repository_creation(self, fake_github) -> None:
        fake_github.add_issue(1, "creator")

        service = LeaderboardService(fake_github, RateLimiter(fake_github))
        leaderboard = await service.get_leaderboard("acme", "widgets")

        assert leaderboard.since == "2023-01-15T00:00:00Z"
        assert fake_github.calls_to("list_issues")[0]["since"] == "2023-01-15T00:00:00Z"
        assert len(fake_github.calls_to("get_repository")) == 1

    @pytest.mark.asyncio
    async def test_datetime_since_is_reported_in_api_format(self, fake_github) -> None:
        service = LeaderboardService(fake_github, RateLimiter(fake_github))
        leaderboard = await service.get_leaderboard(
            "acme", "widgets", since=datetime(2024, 1, 1, tzinfo=UTC)
        )

        assert leaderboard.since == "2024-01-01T00:00:00Z"
        assert fake_github.calls_to("get_repository") == []

    @pytest.mark.asyncio
    async def test_supplied_maintainers_are_not_refetched(self, fake_github) -> None:
        fake_github.add_issue(1, "creator")
        fake_github.add_issue_reaction(1, "maint", "-1")
        maintainers = [
            Maintainer(login="maint", avatar_url="", html_url="", role="Admin"),
        ]

        service = LeaderboardService(fake_github, RateLimiter(fake_github))
        leaderboard = await service.get_leaderboard(
            "acme", "widgets", since="2024-01-01T00:00:00Z", maintainers=maintainers
        )

        assert fake_github.calls_to("list_collaborators") == []
        assert leaderboard.contributors == []
        assert leaderboard.total_percentage == Decimal("0")


class TestLeaderboardSerialization:
    def test_percentages_serialize_as_json_numbers(self) -> None:
        leaderboard = Leaderboard(
            owner="acme",
            repo="widgets",
            since="2024-01-01T00:00:00Z",
            maintainers=[],
            contributors=get_contributor_percentages(_contributors(12, 5)),
            total_percentage=Decimal("100.00"),
        )

        data = json.loads(leaderboard.model_dump_json())

        assert data["contributors"][0]["percentage"] == 70.59
        assert data["total_percentage"] == 100.0
        assert isinstance(data["total_percentage"], float)
        # Python-mode dumps keep the exact Decimal
        assert leaderboard.model_dump()["total_percentage"] == Decimal("100.00")
