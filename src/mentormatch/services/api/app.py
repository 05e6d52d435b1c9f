"""FastAPI application for the public matching API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Query, status
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from mentormatch import matching
from mentormatch.database import create_schema, dispose_engine, get_session
from mentormatch.domain import (
    ConnectionMatches,
    DiscoveryPage,
    IncomingLikes,
    MutualMatches,
    ProfileDraft,
    SwipeAction,
    SwipeOutcome,
    User,
)
from mentormatch.domain.users import CamelModel
from mentormatch.errors import InvalidInputError
from mentormatch.services.base import create_app

profiles_router = APIRouter(prefix="/profiles", tags=["Profiles"])
match_router = APIRouter(prefix="/match", tags=["Legacy matching"])
users_router = APIRouter(prefix="/users", tags=["Interactions"])


class SwipeRequest(CamelModel):
    profile_id: str = Field(..., min_length=1)
    action: SwipeAction


@profiles_router.post("", status_code=status.HTTP_201_CREATED, response_model=User)
async def create_profile(draft: ProfileDraft, session: AsyncSession = Depends(get_session)) -> User:
    """Create a profile for an existing account."""

    return await matching.create_profile(session, draft)


@match_router.get("/{user_id}", response_model=ConnectionMatches)
async def get_matches(user_id: str, session: AsyncSession = Depends(get_session)) -> ConnectionMatches:
    """Find and accumulate compatible users with the legacy matcher."""

    try:
        UUID(user_id)
    except ValueError as exc:
        raise InvalidInputError("Invalid user ID format. Must be a valid UUID.") from exc
    return await matching.get_connection_matches(session, user_id)


@users_router.post("/{user_id}/swipes", response_model=SwipeOutcome)
async def record_swipe(
    user_id: str,
    body: SwipeRequest,
    session: AsyncSession = Depends(get_session),
) -> SwipeOutcome:
    """Record a like or pass and report whether it completed a match."""

    return await matching.swipe(session, user_id, body.profile_id, body.action)


@users_router.get("/{user_id}/discovery", response_model=DiscoveryPage)
async def discover(
    user_id: str,
    limit: int | None = Query(None, description="Page size, capped at the configured maximum."),
    offset: int = Query(0),
    session: AsyncSession = Depends(get_session),
) -> DiscoveryPage:
    """Paginated compatible profiles the user has not swiped on yet."""

    return await matching.discover(session, user_id, limit=limit, offset=offset)


@users_router.get("/{user_id}/likes/incoming", response_model=IncomingLikes)
async def incoming_likes(user_id: str, session: AsyncSession = Depends(get_session)) -> IncomingLikes:
    """Profiles that liked the user and are waiting for a swipe back."""

    likes = await matching.list_incoming_likes(session, user_id)
    return IncomingLikes(likes=likes, count=len(likes))


@users_router.get("/{user_id}/matches", response_model=MutualMatches)
async def mutual_matches(user_id: str, session: AsyncSession = Depends(get_session)) -> MutualMatches:
    """All mutual matches of the user, newest first."""

    matches = await matching.list_mutual_matches(session, user_id)
    return MutualMatches(matches=matches, count=len(matches))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await create_schema()
    yield
    await dispose_engine()


def build_app() -> FastAPI:
    """Return configured FastAPI application."""

    app = create_app("api", lifespan=lifespan)
    app.include_router(profiles_router)
    app.include_router(match_router)
    app.include_router(users_router)
    return app
