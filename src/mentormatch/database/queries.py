"""High-level async helpers for interacting with the record store.

Rows are converted to domain entities through a strict parse boundary: a row
whose fields do not already have the expected types raises
:class:`RecordFormatError` instead of being coerced.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import ValidationError
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.domain import (
    Connection,
    Location,
    Match,
    Preferences,
    ProfileDraft,
    Role,
    Swipe,
    SwipeAction,
    User,
)
from mentormatch.domain.users import DEFAULT_AVATAR
from mentormatch.errors import RecordFormatError

from .models import ConnectionRecord, MatchRecord, SwipeRecord, UserRecord

logger = get_logger(__name__)


def user_from_record(record: UserRecord) -> User:
    """Parse a stored profile row into a :class:`User`."""

    try:
        location = Location.model_validate(
            {
                "city": record.city,
                "country": record.country,
                "latitude": record.latitude,
                "longitude": record.longitude,
            },
            strict=True,
        )
        preferences = Preferences.model_validate(
            {
                "min_age": record.min_age,
                "max_age": record.max_age,
                "max_distance": record.max_distance,
            },
            strict=True,
        )
        return User.model_validate(
            {
                "id": record.id,
                "name": record.name,
                "age": record.age,
                "role": record.role,
                "location": location,
                "preferences": preferences,
                "avatar": record.avatar,
                "bio": record.bio,
                "skills": record.skills if record.skills is not None else [],
            },
            strict=True,
        )
    except ValidationError as exc:
        logger.error("record_parse_failed", table="users", record_id=record.id, errors=exc.errors())
        raise RecordFormatError() from exc


def swipe_from_record(record: SwipeRecord) -> Swipe:
    try:
        return Swipe.model_validate(
            {
                "id": record.id,
                "actor": record.actor_id,
                "target": record.target_id,
                "action": record.action,
                "created_at": record.created_at,
            },
            strict=True,
        )
    except ValidationError as exc:
        logger.error("record_parse_failed", table="swipes", record_id=record.id, errors=exc.errors())
        raise RecordFormatError() from exc


def match_from_record(record: MatchRecord) -> Match:
    try:
        return Match.model_validate(
            {
                "id": record.id,
                "user_low": record.user_low,
                "user_high": record.user_high,
                "matched_at": record.matched_at,
                "conversation_started": record.conversation_started,
            },
            strict=True,
        )
    except ValidationError as exc:
        logger.error("record_parse_failed", table="matches", record_id=record.id, errors=exc.errors())
        raise RecordFormatError() from exc


def connection_from_record(record: ConnectionRecord) -> Connection:
    try:
        return Connection.model_validate(
            {
                "id": record.id,
                "initiator": record.initiator_id,
                "connections": list(record.connections or []),
            },
            strict=True,
        )
    except ValidationError as exc:
        logger.error("record_parse_failed", table="connections", record_id=record.id, errors=exc.errors())
        raise RecordFormatError() from exc


async def insert_user(session: AsyncSession, draft: ProfileDraft) -> UserRecord:
    """Persist a new profile row."""

    record = UserRecord(
        id=draft.user_id,
        name=draft.name,
        age=draft.age,
        role=draft.role,
        city=draft.city,
        country=draft.country,
        latitude=float(draft.latitude),
        longitude=float(draft.longitude),
        min_age=draft.min_age,
        max_age=draft.max_age,
        max_distance=float(draft.max_distance),
        avatar=draft.avatar or DEFAULT_AVATAR,
        bio=draft.bio,
        skills=list(draft.skills),
    )
    session.add(record)
    await session.flush()
    return record


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    """Fetch a single profile, or ``None`` when absent."""

    record = await session.get(UserRecord, user_id)
    if record is None:
        return None
    return user_from_record(record)


async def list_users_by_role(session: AsyncSession, role: Role) -> list[User]:
    """Return every profile with ``role`` in stable store order."""

    result = await session.execute(
        select(UserRecord)
        .where(UserRecord.role == role)
        .order_by(UserRecord.created_at, UserRecord.id)
    )
    return [user_from_record(record) for record in result.scalars()]


async def get_users_by_ids(session: AsyncSession, user_ids: Iterable[str]) -> list[User]:
    """Resolve ids to profiles. Unknown ids are skipped and repeats collapse."""

    ids = set(user_ids)
    if not ids:
        return []
    result = await session.execute(
        select(UserRecord)
        .where(UserRecord.id.in_(ids))
        .order_by(UserRecord.created_at, UserRecord.id)
    )
    return [user_from_record(record) for record in result.scalars()]


async def insert_swipe(
    session: AsyncSession,
    *,
    actor_id: str,
    target_id: str,
    action: SwipeAction,
) -> SwipeRecord:
    """Stage a swipe row. Raises ``IntegrityError`` for a repeated pair."""

    swipe = SwipeRecord(actor_id=actor_id, target_id=target_id, action=action)
    session.add(swipe)
    await session.flush()
    return swipe


async def get_swipe(session: AsyncSession, actor_id: str, target_id: str) -> SwipeRecord | None:
    result = await session.execute(
        select(SwipeRecord).where(
            SwipeRecord.actor_id == actor_id,
            SwipeRecord.target_id == target_id,
        )
    )
    return result.scalar_one_or_none()


async def list_swiped_target_ids(session: AsyncSession, actor_id: str) -> set[str]:
    """Ids of every profile ``actor_id`` has liked or passed."""

    result = await session.execute(
        select(SwipeRecord.target_id).where(SwipeRecord.actor_id == actor_id)
    )
    return set(result.scalars())


async def list_incoming_likes(session: AsyncSession, target_id: str) -> Sequence[SwipeRecord]:
    """Likes received by ``target_id``, most recent first."""

    result = await session.execute(
        select(SwipeRecord)
        .where(
            SwipeRecord.target_id == target_id,
            SwipeRecord.action == SwipeAction.LIKE,
        )
        .order_by(SwipeRecord.created_at.desc(), SwipeRecord.id.desc())
    )
    return result.scalars().all()


async def insert_match(session: AsyncSession, *, user_low: str, user_high: str) -> MatchRecord:
    """Stage a match row. Raises ``IntegrityError`` if the pair already matched."""

    match = MatchRecord(user_low=user_low, user_high=user_high, conversation_started=False)
    session.add(match)
    await session.flush()
    return match


async def get_match_by_pair(session: AsyncSession, user_low: str, user_high: str) -> MatchRecord | None:
    result = await session.execute(
        select(MatchRecord).where(
            MatchRecord.user_low == user_low,
            MatchRecord.user_high == user_high,
        )
    )
    return result.scalar_one_or_none()


async def list_matches_for_user(session: AsyncSession, user_id: str) -> Sequence[MatchRecord]:
    """Matches where ``user_id`` is either party, most recent first."""

    result = await session.execute(
        select(MatchRecord)
        .where(or_(MatchRecord.user_low == user_id, MatchRecord.user_high == user_id))
        .order_by(MatchRecord.matched_at.desc(), MatchRecord.id)
    )
    return result.scalars().all()


async def get_connection(session: AsyncSession, initiator_id: str) -> ConnectionRecord | None:
    result = await session.execute(
        select(ConnectionRecord).where(ConnectionRecord.initiator_id == initiator_id)
    )
    return result.scalar_one_or_none()


async def insert_connection(
    session: AsyncSession,
    *,
    initiator_id: str,
    connections: list[str],
) -> ConnectionRecord:
    record = ConnectionRecord(initiator_id=initiator_id, connections=list(connections))
    session.add(record)
    await session.flush()
    return record


async def append_connections(
    session: AsyncSession,
    record: ConnectionRecord,
    user_ids: list[str],
) -> ConnectionRecord:
    """Append ``user_ids`` to the stored list without de-duplicating."""

    # JSON columns are not mutation-tracked; assign a new list.
    record.connections = [*(record.connections or []), *user_ids]
    await session.flush()
    return record


__all__ = [
    "append_connections",
    "connection_from_record",
    "get_connection",
    "get_match_by_pair",
    "get_swipe",
    "get_user",
    "get_users_by_ids",
    "insert_connection",
    "insert_match",
    "insert_swipe",
    "insert_user",
    "list_incoming_likes",
    "list_matches_for_user",
    "list_swiped_target_ids",
    "list_users_by_role",
    "match_from_record",
    "swipe_from_record",
    "user_from_record",
]
