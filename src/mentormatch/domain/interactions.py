"""Swipe, match and connection models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .users import CamelModel, User


class SwipeAction(str, Enum):
    LIKE = "like"
    PASS = "pass"


class Swipe(CamelModel):
    """One-way decision by ``actor`` about ``target``."""

    id: int
    actor: str
    target: str
    action: SwipeAction
    created_at: datetime


class Match(CamelModel):
    """Mutual like stored once per unordered pair, ``user_low < user_high``."""

    id: str
    user_low: str
    user_high: str
    matched_at: datetime
    conversation_started: bool = False


class MatchResult(Match):
    """Match plus a snapshot of the other party's profile."""

    profile: User


class SwipeOutcome(CamelModel):
    swipe: Swipe
    match: Optional[MatchResult] = None
    message: str


class MatchView(CamelModel):
    """A match as seen by one of its two parties."""

    match_id: str
    profile: User
    matched_at: datetime
    conversation_started: bool


class IncomingLike(User):
    liked_at: datetime


class DiscoveryPage(CamelModel):
    profiles: list[User] = Field(default_factory=list)
    has_more: bool
    next_offset: int
    total: int


class Connection(CamelModel):
    """Legacy accumulating list of compatible users found for ``initiator``."""

    id: int
    initiator: str
    connections: list[str] = Field(default_factory=list)


class ConnectionMatches(CamelModel):
    """Users accumulated by the legacy matcher plus a summary message."""

    matches: list[User] = Field(default_factory=list)
    message: str


class IncomingLikes(CamelModel):
    likes: list[IncomingLike] = Field(default_factory=list)
    count: int


class MutualMatches(CamelModel):
    matches: list[MatchView] = Field(default_factory=list)
    count: int


__all__ = [
    "Connection",
    "ConnectionMatches",
    "DiscoveryPage",
    "IncomingLike",
    "IncomingLikes",
    "Match",
    "MatchResult",
    "MatchView",
    "MutualMatches",
    "Swipe",
    "SwipeAction",
    "SwipeOutcome",
]
