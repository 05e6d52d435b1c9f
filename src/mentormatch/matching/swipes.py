"""Swipe ledger: one like/pass decision per ordered (actor, target) pair."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.database import queries
from mentormatch.domain import Swipe, SwipeAction
from mentormatch.errors import ConflictError, InvalidInputError

from .lookup import load_user, require_id

logger = get_logger(__name__)


def parse_action(action: SwipeAction | str) -> SwipeAction:
    """Coerce ``"like"``/``"pass"`` into :class:`SwipeAction`."""

    if isinstance(action, SwipeAction):
        return action
    try:
        return SwipeAction(action)
    except ValueError as exc:
        raise InvalidInputError(f'Invalid swipe action "{action}"; expected "like" or "pass"') from exc


async def record_swipe(
    session: AsyncSession,
    actor_id: str,
    target_id: str,
    action: SwipeAction | str,
) -> Swipe:
    """Persist a swipe and commit it.

    Raises:
        InvalidInputError: blank identifiers or an unknown action
        NotFoundError: either user is missing
        ConflictError: ``actor_id`` already swiped on ``target_id``
    """

    actor_id = require_id(actor_id)
    target_id = require_id(target_id, "profile ID")
    action = parse_action(action)

    await load_user(session, actor_id)
    await load_user(session, target_id, label="Profile")

    try:
        record = await queries.insert_swipe(
            session, actor_id=actor_id, target_id=target_id, action=action
        )
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("swipe_conflict", actor=actor_id, target=target_id, action=action.value)
        raise ConflictError("Already swiped this profile") from exc

    swipe = queries.swipe_from_record(record)
    logger.info("swipe_recorded", swipe_id=swipe.id, actor=actor_id, target=target_id, action=action.value)
    return swipe


async def has_liked(session: AsyncSession, actor_id: str, target_id: str) -> bool:
    """True iff ``actor_id`` has a ``like`` on record for ``target_id``."""

    record = await queries.get_swipe(session, actor_id, target_id)
    return record is not None and record.action == SwipeAction.LIKE


__all__ = ["has_liked", "parse_action", "record_swipe"]
