"""Profile creation."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from mentormatch.database import queries
from mentormatch.domain import ProfileDraft, User
from mentormatch.errors import ConflictError

logger = get_logger(__name__)


async def create_profile(session: AsyncSession, draft: ProfileDraft) -> User:
    """Persist a new profile for ``draft.user_id``.

    Raises:
        ConflictError: the user already has a profile
    """

    if await queries.get_user(session, draft.user_id) is not None:
        raise ConflictError("Profile already exists for this user")

    try:
        record = await queries.insert_user(session, draft)
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("Profile already exists for this user") from exc

    logger.info("profile_created", user_id=record.id, role=record.role.value)
    return queries.user_from_record(record)


__all__ = ["create_profile"]
