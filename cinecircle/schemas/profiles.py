"""Schemas for profile directory endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

Count = Union[int, Literal["unknown"]]


class ProfileSummary(BaseModel):
    """Public card shown next to requests, friends and feed entries."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    avatar_url: str | None = None


class ProfileCard(ProfileSummary):
    user_email: str | None = None
    saved_movies: int = 0


class ProfileDetail(ProfileCard):
    created_at: datetime | None = None
    last_login: datetime | None = None


class ProfileStats(BaseModel):
    watched: Count
    watching: Count
    wishlist: Count
    total: Count


class ProfileOverviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: ProfileDetail
    stats: ProfileStats
    can_view_movies: bool = Field(..., alias="canViewMovies")


class ProfileListResponse(BaseModel):
    users: list[ProfileCard]


__all__ = [
    "ProfileSummary",
    "ProfileCard",
    "ProfileDetail",
    "ProfileStats",
    "ProfileOverviewResponse",
    "ProfileListResponse",
]
