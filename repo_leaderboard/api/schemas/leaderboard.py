from pydantic import BaseModel

from repo_leaderboard.models.leaderboard import Percentage


class MaintainerEntry(BaseModel):
    login: str
    avatar_url: str
    html_url: str
    role: str

    model_config = {"from_attributes": True}


class MaintainerList(BaseModel):
    repository: str
    maintainers: list[MaintainerEntry]
    total: int


class ContributorEntry(BaseModel):
    rank: int
    login: str
    score: int
    percentage: Percentage


class LeaderboardResponse(BaseModel):
    repository: str
    since: str | None
    maintainers: list[MaintainerEntry]
    entries: list[ContributorEntry]
    total: int
    total_percentage: Percentage
