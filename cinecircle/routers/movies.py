"""Routes for managing a user's own movie lists."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    MovieSavePayload,
    RemoveMovieResponse,
    SaveMovieResponse,
    SyncSavedMoviesRequest,
    SyncSavedMoviesResponse,
    UserMovieItem,
)
from ..services import list_saved_movies, remove_movie, save_movie_status, sync_saved_movies
from ..services.auth_service import ensure_actor, get_token_subject

router = APIRouter(prefix="/movies", tags=["movies"])
sync_router = APIRouter(tags=["movies"])


@router.get("", response_model=list[UserMovieItem])
async def get_saved_movies(
    user_id: UUID = Query(..., alias="userId"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> list[UserMovieItem]:
    ensure_actor(subject, user_id)
    return [UserMovieItem.model_validate(entry) for entry in list_saved_movies(db, user_id)]


@router.post("", response_model=SaveMovieResponse)
async def save_movie(
    payload: MovieSavePayload,
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> SaveMovieResponse:
    ensure_actor(subject, payload.user_id)
    entry, is_new = save_movie_status(db, payload)
    return SaveMovieResponse(success=True, is_new=is_new, data=UserMovieItem.model_validate(entry))


@router.delete("", response_model=RemoveMovieResponse)
async def delete_movie(
    user_id: UUID = Query(..., alias="userId"),
    movie_id: UUID = Query(..., alias="movieId"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> RemoveMovieResponse:
    ensure_actor(subject, user_id)
    removed = remove_movie(db, user_id=user_id, movie_id=movie_id)
    message = "Movie removed from list" if removed else "Movie was not in the list"
    return RemoveMovieResponse(success=True, message=message)


@sync_router.post("/sync-saved-movies", response_model=SyncSavedMoviesResponse)
async def sync_movies(
    payload: SyncSavedMoviesRequest,
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> SyncSavedMoviesResponse:
    ensure_actor(subject, payload.user_id)
    actual = sync_saved_movies(db, payload.user_id)
    return SyncSavedMoviesResponse(
        success=True,
        actual_count=actual,
        message=f"Synchronized saved_movies count to {actual}",
    )
