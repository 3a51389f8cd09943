from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

from repo_leaderboard.core.config import settings
from repo_leaderboard.services.rate_limiter import RateLimiter

logger = structlog.get_logger()

ItemT = TypeVar("ItemT")


async def fetch_all(
    method: Callable[..., Awaitable[list[ItemT]]],
    rate_limiter: RateLimiter,
    per_page: int | None = None,
    **params: Any,
) -> list[ItemT]:
    """Drain a paged listing method into a single list.

    Pages are requested from 1 upwards, each behind a rate limit check, until
    a page comes back shorter than ``per_page``. Items keep the order GitHub
    returns them in.
    """
    per_page = per_page or settings.github_page_size
    items: list[ItemT] = []
    page = 1

    while True:
        await rate_limiter.check()
        data = await method(**params, page=page, per_page=per_page)
        items.extend(data)
        logger.debug(
            "Fetched page",
            method=getattr(method, "__name__", repr(method)),
            page=page,
            count=len(data),
        )
        if len(data) < per_page:
            break
        page += 1

    return items
