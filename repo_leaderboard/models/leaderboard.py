from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Exact in Python, a plain JSON number on the wire
Percentage = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Role(str, Enum):
    ADMIN = "Admin"
    MAINTAINER = "Maintainer"
    COLLABORATOR = "Collaborator"
    CONTRIBUTOR = "Contributor"


class Maintainer(BaseModel):
    login: str
    avatar_url: str
    html_url: str
    role: str


class Contributor(BaseModel):
    login: str
    score: int


class ContributorPercentage(Contributor):
    percentage: Percentage


class Leaderboard(BaseModel):
    owner: str
    repo: str
    since: str | None
    maintainers: list[Maintainer]
    contributors: list[ContributorPercentage]
    total_percentage: Percentage
