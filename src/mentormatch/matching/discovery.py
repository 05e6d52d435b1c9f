"""Paginated discovery feed and incoming-like listing."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.config import get_settings
from mentormatch.database import queries
from mentormatch.domain import DiscoveryPage, IncomingLike
from mentormatch.errors import InvalidInputError

from .compatibility import find_candidates
from .lookup import load_pool, load_user, require_id

logger = get_logger(__name__)


def resolve_page_bounds(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Validate paging input and cap ``limit`` to the configured maximum.

    ``limit`` below 1 or a negative ``offset`` are rejected, never clamped.
    """

    settings = get_settings().discovery
    if limit is None:
        limit = settings.default_limit
    if offset is None:
        offset = 0
    if limit < 1:
        raise InvalidInputError("Invalid query parameters: limit must be at least 1")
    if offset < 0:
        raise InvalidInputError("Invalid query parameters: offset must be non-negative")
    return min(limit, settings.max_limit), offset


async def discover(
    session: AsyncSession,
    user_id: str,
    limit: int | None = None,
    offset: int | None = None,
) -> DiscoveryPage:
    """Compatible, not-yet-swiped candidates for ``user_id``, one page at a time."""

    user_id = require_id(user_id)
    limit, offset = resolve_page_bounds(limit, offset)

    current = await load_user(session, user_id)
    pool = await load_pool(session, current)
    candidates = find_candidates(current, pool)

    swiped = await queries.list_swiped_target_ids(session, user_id)
    available = [user for user in candidates if user.id not in swiped]

    total = len(available)
    page = available[offset : offset + limit]
    has_more = offset + limit < total
    next_offset = offset + limit if has_more else offset

    logger.debug(
        "discovery_page_built",
        user_id=user_id,
        pool=len(pool),
        compatible=len(candidates),
        total=total,
        returned=len(page),
        offset=offset,
    )
    return DiscoveryPage(profiles=page, has_more=has_more, next_offset=next_offset, total=total)


async def list_incoming_likes(session: AsyncSession, user_id: str) -> list[IncomingLike]:
    """Users who liked ``user_id`` and are still awaiting a swipe back, newest first."""

    user_id = require_id(user_id)
    await load_user(session, user_id)

    likes = await queries.list_incoming_likes(session, user_id)
    if not likes:
        return []

    swiped = await queries.list_swiped_target_ids(session, user_id)
    pending = [like for like in likes if like.actor_id not in swiped]
    if not pending:
        return []

    profiles = {
        user.id: user
        for user in await queries.get_users_by_ids(session, [like.actor_id for like in pending])
    }
    # ``pending`` is already ordered by like time, newest first.
    return [
        IncomingLike(**profiles[like.actor_id].model_dump(), liked_at=like.created_at)
        for like in pending
        if like.actor_id in profiles
    ]


__all__ = ["discover", "list_incoming_likes", "resolve_page_bounds"]
