"""Business logic for the user directory and profile overviews."""
from __future__ import annotations

from uuid import UUID

from fastapi import status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..constants import UNKNOWN_COUNT
from ..models import Profile
from ..schemas import ProfileCard, ProfileDetail, ProfileOverviewResponse, ProfileStats
from .access_policy import can_view
from .errors import ServiceError
from .movie_list_service import movie_counts

TOP_PROFILES_LIMIT = 12
SUGGESTION_LIMIT = 50
SEARCH_LIMIT = 20
MIN_SEARCH_LENGTH = 2


class ProfileNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User not found"


def get_profile_or_404(db: Session, profile_id: UUID) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise ProfileNotFoundError()
    return profile


def list_top_profiles(db: Session, *, limit: int = TOP_PROFILES_LIMIT) -> list[Profile]:
    stmt = select(Profile).order_by(Profile.saved_movies.desc(), Profile.created_at.asc()).limit(limit)
    return list(db.scalars(stmt))


def list_suggested_profiles(db: Session, *, exclude_id: UUID | None = None, limit: int = SUGGESTION_LIMIT) -> list[Profile]:
    stmt = select(Profile).order_by(Profile.created_at.desc())
    if exclude_id is not None:
        stmt = stmt.where(Profile.id != exclude_id)
    return list(db.scalars(stmt.limit(limit)))


def search_profiles(
    db: Session,
    query: str | None,
    *,
    exclude_id: UUID | None = None,
    limit: int = SEARCH_LIMIT,
) -> list[Profile]:
    """Case-insensitive match on names, username and email; short queries return nothing."""

    term = (query or "").strip().lower()
    if len(term) < MIN_SEARCH_LENGTH:
        return []

    pattern = f"%{term}%"
    stmt = select(Profile).where(
        or_(
            Profile.first_name.ilike(pattern),
            Profile.last_name.ilike(pattern),
            Profile.user_email.ilike(pattern),
            Profile.username.ilike(pattern),
        )
    )
    if exclude_id is not None:
        stmt = stmt.where(Profile.id != exclude_id)
    return list(db.scalars(stmt.order_by(Profile.username.asc()).limit(limit)))


def get_profile_overview(db: Session, *, profile_id: UUID, requester_id: UUID | None) -> ProfileOverviewResponse:
    """Basic profile info is public; per-status counts depend on the access policy."""

    profile = get_profile_or_404(db, profile_id)
    allowed = can_view(db, requester_id, profile_id)
    if allowed:
        counts = movie_counts(db, profile_id)
        stats = ProfileStats(
            watched=counts.watched,
            watching=counts.watching,
            wishlist=counts.wishlist,
            total=counts.total,
        )
    else:
        stats = ProfileStats(
            watched=UNKNOWN_COUNT,
            watching=UNKNOWN_COUNT,
            wishlist=UNKNOWN_COUNT,
            total=UNKNOWN_COUNT,
        )
    return ProfileOverviewResponse(
        profile=ProfileDetail.model_validate(profile),
        stats=stats,
        can_view_movies=allowed,
    )


def profile_cards(profiles: list[Profile]) -> list[ProfileCard]:
    return [ProfileCard.model_validate(profile) for profile in profiles]


__all__ = [
    "ProfileNotFoundError",
    "get_profile_or_404",
    "list_top_profiles",
    "list_suggested_profiles",
    "search_profiles",
    "get_profile_overview",
    "profile_cards",
]
