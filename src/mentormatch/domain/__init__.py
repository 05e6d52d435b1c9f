"""Domain models shared across the engine and the API."""

from .interactions import (
    Connection,
    ConnectionMatches,
    DiscoveryPage,
    IncomingLike,
    IncomingLikes,
    Match,
    MatchResult,
    MatchView,
    MutualMatches,
    Swipe,
    SwipeAction,
    SwipeOutcome,
)
from .users import Location, Preferences, ProfileDraft, Role, User

__all__ = [
    "Connection",
    "ConnectionMatches",
    "DiscoveryPage",
    "IncomingLike",
    "IncomingLikes",
    "Location",
    "Match",
    "MatchResult",
    "MatchView",
    "MutualMatches",
    "Preferences",
    "ProfileDraft",
    "Role",
    "Swipe",
    "SwipeAction",
    "SwipeOutcome",
    "User",
]
