"""Request-level operations composed from the engine components."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from mentormatch.database import queries
from mentormatch.domain import ConnectionMatches, SwipeAction, SwipeOutcome

from .connections import find_connections, save_connections
from .lookup import load_user, require_id
from .matches import on_swipe
from .swipes import parse_action, record_swipe

NO_CONNECTIONS_MESSAGE = (
    "Could not find any connections that meet your search criteria. "
    "Try broadening your search to get more matches"
)
SWIPE_RECORDED_MESSAGE = "Swipe recorded"
MATCH_MESSAGE = "It's a match!"


def connections_message(count: int) -> str:
    if count == 0:
        return NO_CONNECTIONS_MESSAGE
    if count == 1:
        return "Found 1 connection"
    return f"Found {count} connections"


async def swipe(
    session: AsyncSession,
    actor_id: str,
    target_id: str,
    action: SwipeAction | str,
) -> SwipeOutcome:
    """Record a swipe, then check it for a mutual match.

    The swipe is committed before matching runs; a failure while matching
    propagates to the caller but leaves the swipe in place.
    """

    action = parse_action(action)
    recorded = await record_swipe(session, actor_id, target_id, action)
    match = await on_swipe(session, recorded.actor, recorded.target, recorded.action)
    return SwipeOutcome(
        swipe=recorded,
        match=match,
        message=MATCH_MESSAGE if match is not None else SWIPE_RECORDED_MESSAGE,
    )


async def get_connection_matches(session: AsyncSession, user_id: str) -> ConnectionMatches:
    """Run the legacy matcher and return every user accumulated for ``user_id``.

    Nothing is written when no compatible user is found.
    """

    user_id = require_id(user_id)
    current = await load_user(session, user_id)
    found = await find_connections(session, current)
    if not found:
        return ConnectionMatches(matches=[], message=NO_CONNECTIONS_MESSAGE)

    connection = await save_connections(session, current.id, found)
    users = await queries.get_users_by_ids(session, connection.connections)
    return ConnectionMatches(matches=users, message=connections_message(len(users)))


__all__ = [
    "MATCH_MESSAGE",
    "NO_CONNECTIONS_MESSAGE",
    "SWIPE_RECORDED_MESSAGE",
    "connections_message",
    "get_connection_matches",
    "swipe",
]
