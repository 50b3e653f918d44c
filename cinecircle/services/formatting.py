"""Shared helpers for shaping rows into API payloads and paginating merged lists."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Sequence, TypeVar

from ..models import Movie, Profile
from ..schemas import FeedProfile, MovieSummary, Pagination, ProfileSummary

T = TypeVar("T")


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (SQLite) as UTC so mixed sources compare cleanly."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def profile_summary(profile: Profile | None) -> ProfileSummary | None:
    if profile is None:
        return None
    return ProfileSummary.model_validate(profile)


def feed_profile(profile: Profile | None) -> FeedProfile | None:
    if profile is None:
        return None
    return FeedProfile.model_validate(profile)


def movie_summary(movie: Movie | None) -> MovieSummary | None:
    if movie is None:
        return None
    return MovieSummary.model_validate(movie)


def paginate(entries: Sequence[T], *, page: int, page_size: int) -> tuple[list[T], Pagination]:
    """Slice an already merged and sorted sequence.

    ``total`` is taken before slicing so it always describes the whole merged
    sequence, never a single source.
    """

    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be positive")

    total = len(entries)
    offset = (page - 1) * page_size
    window = list(entries[offset : offset + page_size])
    pagination = Pagination(
        page=page,
        limit=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
        has_more=total > offset + page_size,
    )
    return window, pagination


__all__ = ["as_utc", "profile_summary", "feed_profile", "movie_summary", "paginate"]
