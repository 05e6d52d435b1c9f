"""Mutual-like detection and canonical match creation."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.database import queries
from mentormatch.domain import Match, MatchResult, MatchView, SwipeAction
from mentormatch.errors import InvalidInputError

from .lookup import load_user, require_id
from .swipes import has_liked

logger = get_logger(__name__)


def canonical_pair(first: str, second: str) -> tuple[str, str]:
    """Order two user ids as ``(low, high)``.

    Ordering is plain ``str`` comparison (Unicode code points), the same
    ordering the ``ck_matches_canonical_order`` constraint applies to UTF-8
    text. Every store backend must use this comparison so that an unordered
    pair maps to exactly one row.
    """

    if first == second:
        raise InvalidInputError("A user cannot match with themselves")
    return (first, second) if first < second else (second, first)


async def create_match(session: AsyncSession, first: str, second: str) -> Match:
    """Create the match for an unordered pair, or return the one already stored.

    Concurrent detectors racing on the same pair both succeed: the loser's
    insert trips ``uq_matches_pair`` and it returns the winner's row.
    """

    user_low, user_high = canonical_pair(first, second)

    existing = await queries.get_match_by_pair(session, user_low, user_high)
    if existing is not None:
        return queries.match_from_record(existing)

    try:
        record = await queries.insert_match(session, user_low=user_low, user_high=user_high)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        record = await queries.get_match_by_pair(session, user_low, user_high)
        if record is None:
            raise
        logger.info("match_race_resolved", match_id=record.id, user_low=user_low, user_high=user_high)
        return queries.match_from_record(record)

    logger.info("match_created", match_id=record.id, user_low=user_low, user_high=user_high)
    return queries.match_from_record(record)


async def on_swipe(
    session: AsyncSession,
    actor_id: str,
    target_id: str,
    action: SwipeAction,
) -> MatchResult | None:
    """Turn a recorded swipe into a match when the like is reciprocated.

    Passes, self-swipes and one-sided likes yield ``None``. The returned match
    carries the target's profile for display.
    """

    if action != SwipeAction.LIKE or actor_id == target_id:
        return None

    if not await has_liked(session, target_id, actor_id):
        return None

    match = await create_match(session, actor_id, target_id)
    profile = await load_user(session, target_id, label="Profile")
    return MatchResult(**match.model_dump(), profile=profile)


async def list_mutual_matches(session: AsyncSession, user_id: str) -> list[MatchView]:
    """Every match involving ``user_id``, newest first, resolved to the other party.

    Matches whose counterpart no longer resolves to a profile are skipped.
    """

    user_id = require_id(user_id)
    await load_user(session, user_id)

    records = await queries.list_matches_for_user(session, user_id)
    if not records:
        return []

    matches = [queries.match_from_record(record) for record in records]
    other_ids = [m.user_high if m.user_low == user_id else m.user_low for m in matches]
    profiles = {user.id: user for user in await queries.get_users_by_ids(session, other_ids)}

    views: list[MatchView] = []
    for match, other_id in zip(matches, other_ids):
        profile = profiles.get(other_id)
        if profile is None:
            logger.info("match_counterpart_missing", match_id=match.id, user_id=other_id)
            continue
        views.append(
            MatchView(
                match_id=match.id,
                profile=profile,
                matched_at=match.matched_at,
                conversation_started=match.conversation_started,
            )
        )
    return views


__all__ = ["canonical_pair", "create_match", "list_mutual_matches", "on_swipe"]
