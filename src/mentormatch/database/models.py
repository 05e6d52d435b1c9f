"""SQLAlchemy ORM models for the matching record store."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from mentormatch.domain.interactions import SwipeAction
from mentormatch.domain.users import Role


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class TimestampMixin:
    """Mixin that adds created/updated timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


ROLE_ENUM = Enum(Role, name="role_enum", values_callable=lambda roles: [r.value for r in roles])
SWIPE_ACTION_ENUM = Enum(
    SwipeAction, name="swipe_action_enum", values_callable=lambda actions: [a.value for a in actions]
)


class UserRecord(Base, TimestampMixin):
    """Profile row for a mentor or mentee."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[Role] = mapped_column(ROLE_ENUM, nullable=False, index=True)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    min_age: Mapped[int] = mapped_column(Integer, nullable=False)
    max_age: Mapped[int] = mapped_column(Integer, nullable=False)
    max_distance: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("min_age <= max_age", name="ck_users_age_window"),
    )


class SwipeRecord(Base):
    """Like/pass decision; one row per ordered (actor, target) pair."""

    __tablename__ = "swipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    actor_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[SwipeAction] = mapped_column(SWIPE_ACTION_ENUM, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("actor_id", "target_id", name="uq_swipes_actor_target"),
        Index("ix_swipes_target_action", "target_id", "action"),
    )


class MatchRecord(Base):
    """Mutual like keyed by the canonical (low, high) user pair."""

    __tablename__ = "matches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_low: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    user_high: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    matched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    conversation_started: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("user_low", "user_high", name="uq_matches_pair"),
        CheckConstraint("user_low < user_high", name="ck_matches_canonical_order"),
        Index("ix_matches_user_high", "user_high"),
    )


class ConnectionRecord(Base, TimestampMixin):
    """Legacy append-only list of compatible users for one initiator."""

    __tablename__ = "connections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    initiator_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    connections: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("initiator_id", name="uq_connections_initiator"),
    )


__all__ = [
    "Base",
    "ConnectionRecord",
    "MatchRecord",
    "SwipeRecord",
    "UserRecord",
]
