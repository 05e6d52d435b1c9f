"""Identifier validation and user loading shared by the engine operations."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from mentormatch.database import queries
from mentormatch.domain import User
from mentormatch.errors import InvalidInputError, NotFoundError


def require_id(value: str | None, label: str = "user ID") -> str:
    """Reject empty or blank identifiers."""

    if value is None or not str(value).strip():
        raise InvalidInputError(f"Invalid {label} format.")
    return str(value)


async def load_user(session: AsyncSession, user_id: str, label: str = "User") -> User:
    """Fetch ``user_id`` or raise :class:`NotFoundError` naming it."""

    user = await queries.get_user(session, user_id)
    if user is None:
        raise NotFoundError(f'{label} with id "{user_id}" not found')
    return user


async def load_pool(session: AsyncSession, current: User) -> list[User]:
    """All users on the other side of ``current``'s role."""

    return await queries.list_users_by_role(session, current.role.opposite)


__all__ = ["load_pool", "load_user", "require_id"]
