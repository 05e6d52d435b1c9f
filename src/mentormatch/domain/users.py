"""User profile models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_AVATAR = "https://via.placeholder.com/150"


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Role(str, Enum):
    """The two sides of the mentoring relationship."""

    MENTOR = "Mentor"
    MENTEE = "Mentee"

    @property
    def opposite(self) -> Role:
        return Role.MENTEE if self is Role.MENTOR else Role.MENTOR


class Location(CamelModel):
    city: str
    country: str
    latitude: float
    longitude: float


class Preferences(CamelModel):
    """Age window and distance limit a user accepts. ``max_distance == 0`` means no limit."""

    min_age: int
    max_age: int
    max_distance: float = Field(0, ge=0, description="Kilometers; 0 disables the check.")


class User(CamelModel):
    """Matchable profile as read from the record store."""

    id: str
    name: str
    age: int
    role: Role
    location: Location
    preferences: Preferences
    avatar: Optional[str] = None
    bio: Optional[str] = None
    skills: list[str] = Field(default_factory=list)


class ProfileDraft(CamelModel):
    """Validated input for creating a profile."""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., ge=18, le=120)
    role: Role
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    min_age: int = Field(..., ge=18, le=120)
    max_age: int = Field(..., ge=18, le=120)
    max_distance: float = Field(..., ge=0, le=500)
    avatar: Optional[str] = None
    bio: Optional[str] = None
    skills: list[str] = Field(default_factory=list, max_length=20)

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "mentor":
                return Role.MENTOR
            if normalized == "mentee":
                return Role.MENTEE
            raise ValueError('Role must be either "mentor" or "mentee"')
        return value

    @field_validator("skills")
    @classmethod
    def _check_skills(cls, value: list[str]) -> list[str]:
        for skill in value:
            if not 1 <= len(skill) <= 50:
                raise ValueError("Each skill must be between 1 and 50 characters")
        return value

    @model_validator(mode="after")
    def _check_age_window(self) -> ProfileDraft:
        if self.max_age < self.min_age:
            raise ValueError("maxAge must be greater than or equal to minAge")
        return self


__all__ = ["DEFAULT_AVATAR", "CamelModel", "Location", "Preferences", "ProfileDraft", "Role", "User"]
