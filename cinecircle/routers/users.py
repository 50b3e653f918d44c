"""User directory and public profile routes."""
from __future__ import annotations

from typing import Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    GroupedMovies,
    ProfileListResponse,
    ProfileOverviewResponse,
    UserMovieItem,
    UserMoviesResponse,
)
from ..services import (
    ServiceError,
    get_profile_overview,
    list_suggested_profiles,
    list_top_profiles,
    list_user_movies,
    require_view_access,
    search_profiles,
)
from ..services.auth_service import (
    ensure_actor,
    ensure_claimed_actor,
    get_optional_token_subject,
    get_token_subject,
)
from ..services.profile_service import profile_cards

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Union[ProfileListResponse, ProfileOverviewResponse])
async def browse_users(
    directory: str | None = Query(None, alias="type"),
    user_id: UUID | None = Query(None, alias="userId"),
    q: str | None = Query(None),
    profile_id: UUID | None = Query(None, alias="profileId"),
    requester_id: UUID | None = Query(None, alias="requesterId"),
    subject: UUID | None = Depends(get_optional_token_subject),
    db: Session = Depends(get_session),
) -> Union[ProfileListResponse, ProfileOverviewResponse]:
    if directory == "top":
        return ProfileListResponse(users=profile_cards(list_top_profiles(db)))
    if directory == "all":
        return ProfileListResponse(users=profile_cards(list_suggested_profiles(db, exclude_id=user_id)))
    if directory == "search":
        return ProfileListResponse(users=profile_cards(search_profiles(db, q, exclude_id=user_id)))
    if directory == "profile":
        if profile_id is None:
            raise ServiceError("Profile ID required")
        if requester_id is not None:
            ensure_claimed_actor(subject, requester_id)
        return get_profile_overview(db, profile_id=profile_id, requester_id=requester_id)
    raise ServiceError("Invalid type parameter")


@router.get("/movies", response_model=UserMoviesResponse)
async def user_movies(
    user_id: UUID = Query(..., alias="userId"),
    requester_id: UUID | None = Query(None, alias="requesterId"),
    movie_status: str | None = Query(None, alias="status"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> UserMoviesResponse:
    if requester_id is not None:
        ensure_actor(subject, requester_id)
    require_view_access(db, requester_id, user_id)

    movies = list_user_movies(db, user_id, movie_status)
    if isinstance(movies, dict):
        grouped = {key: [UserMovieItem.model_validate(entry) for entry in entries] for key, entries in movies.items()}
        return UserMoviesResponse(movies=GroupedMovies(**grouped))
    return UserMoviesResponse(movies=[UserMovieItem.model_validate(entry) for entry in movies])
