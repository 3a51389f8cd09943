from datetime import datetime
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Repository Contributor Leaderboard"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # GitHub API
    github_token: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_timeout: float = 30.0
    github_max_attempts: int = 1  # 1 = no retries

    # Leaderboard target
    github_owner: str = "wslyvh"
    github_repo: str = "nexth"
    github_since: str | None = None
    github_top: int | None = None

    # Rate limiting and pagination
    github_rate_limit_threshold: int = 100  # Pause at or below this many remaining requests
    github_rate_limit_delay: float = 60.0  # Seconds
    github_page_size: int = 100

    @field_validator("github_token", "github_since", mode="before")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("github_since")
    @classmethod
    def validate_since(cls, v: str | None) -> str | None:
        if v is not None:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
        return v

    @field_validator("github_top")
    @classmethod
    def validate_top(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("github_top must be a positive integer")
        return v

    @field_validator("github_max_attempts", "github_page_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
