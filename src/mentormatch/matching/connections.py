"""Legacy connection accumulator.

Predates swiping: every compatible user found for an initiator is appended to
a single per-initiator list. Appends are never de-duplicated, so repeated runs
over an unchanged pool record the same ids again.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.database import queries
from mentormatch.domain import Connection, User

from .compatibility import find_candidates
from .lookup import load_pool, load_user, require_id

logger = get_logger(__name__)


async def find_connections(session: AsyncSession, current: User) -> list[User]:
    """Compatible users of the opposite role, with no swipe exclusion."""

    pool = await load_pool(session, current)
    return find_candidates(current, pool)


async def save_connections(session: AsyncSession, initiator_id: str, users: list[User]) -> Connection:
    """Create the initiator's connection row or append ``users`` to it."""

    ids = [user.id for user in users]

    record = await queries.get_connection(session, initiator_id)
    if record is None:
        try:
            record = await queries.insert_connection(session, initiator_id=initiator_id, connections=ids)
            await session.commit()
            logger.info("connections_created", initiator=initiator_id, added=len(ids))
            return queries.connection_from_record(record)
        except IntegrityError:
            # Another request created the row first; append to it instead.
            await session.rollback()
            record = await queries.get_connection(session, initiator_id)
            if record is None:
                raise

    await queries.append_connections(session, record, ids)
    await session.commit()
    logger.info(
        "connections_appended",
        initiator=initiator_id,
        added=len(ids),
        size=len(record.connections),
    )
    return queries.connection_from_record(record)


async def match_and_save(session: AsyncSession, user_id: str) -> Connection:
    """Compute ``user_id``'s compatible users and accumulate them on its connection row."""

    user_id = require_id(user_id)
    current = await load_user(session, user_id)
    matches = await find_connections(session, current)
    return await save_connections(session, current.id, matches)


__all__ = ["find_connections", "match_and_save", "save_connections"]
