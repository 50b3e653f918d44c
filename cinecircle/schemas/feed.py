"""Schemas for the merged activity feeds.

Entries form a tagged union keyed on ``log_type``. Every variant exposes
``updated_at`` as its ordering timestamp: the creation time for friend
requests and the last status change for movie records.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .movies import MovieSummary
from .profiles import ProfileSummary


class FeedProfile(ProfileSummary):
    user_email: str | None = None


class FriendRequestLogEntry(BaseModel):
    log_type: Literal["friend_request"] = "friend_request"
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    sender_email: str | None = None
    receiver_email: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime
    sender: FeedProfile | None = None
    receiver: FeedProfile | None = None
    # Only set when the entry is rendered for one of the two participants.
    perspective: Literal["sender", "receiver"] | None = None
    other_user: FeedProfile | None = None


class FriendMovieLogEntry(BaseModel):
    log_type: Literal["friend_movie"] = "friend_movie"
    id: UUID
    user_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime
    watched_date: datetime | None = None
    friend: FeedProfile | None = None
    movie: MovieSummary | None = None


class MovieLogEntry(BaseModel):
    log_type: Literal["movie"] = "movie"
    id: UUID
    user_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime
    watched_date: datetime | None = None
    user: FeedProfile | None = None
    movie: MovieSummary | None = None


ActivityEntry = Annotated[
    Union[FriendRequestLogEntry, FriendMovieLogEntry, MovieLogEntry],
    Field(discriminator="log_type"),
]


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")
    has_more: bool = Field(..., alias="hasMore")


class FeedPage(BaseModel):
    data: list[ActivityEntry]
    pagination: Pagination


__all__ = [
    "FeedProfile",
    "FriendRequestLogEntry",
    "FriendMovieLogEntry",
    "MovieLogEntry",
    "ActivityEntry",
    "Pagination",
    "FeedPage",
]
