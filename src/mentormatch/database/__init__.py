"""Database utilities for the matching service."""

from .models import Base, ConnectionRecord, MatchRecord, SwipeRecord, UserRecord
from .session import async_session_factory, create_schema, dispose_engine, get_engine, get_session

__all__ = [
    "async_session_factory",
    "create_schema",
    "dispose_engine",
    "get_engine",
    "get_session",
    "Base",
    "ConnectionRecord",
    "MatchRecord",
    "SwipeRecord",
    "UserRecord",
]
