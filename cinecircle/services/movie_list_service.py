"""Per-user movie lists and the denormalized ``saved_movies`` counter."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import status
from sqlalchemy import case, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..constants import MOVIE_GROUP_KEYS, MOVIE_STATUSES, MOVIE_WATCHED, MOVIE_WATCHING, MOVIE_WISHLIST
from ..models import Movie, Profile, UserMovie
from ..models.base import utcnow
from ..schemas import MovieSavePayload
from .errors import ServiceError, StoreError

logger = logging.getLogger(__name__)

DEFAULT_RATING_SOURCE = "IMDB"
DEFAULT_MOVIE_TYPE = "movie"


class MovieListError(ServiceError):
    default_detail = "Invalid movie list operation"


@dataclass(slots=True)
class MovieCounts:
    watched: int = 0
    watching: int = 0
    wishlist: int = 0

    @property
    def total(self) -> int:
        return self.watched + self.watching + self.wishlist


def _require_profile(db: Session, user_id: UUID) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise MovieListError("User not found", status_code=status.HTTP_404_NOT_FOUND)
    return profile


def _resolve_catalog_movie(db: Session, payload: MovieSavePayload) -> Movie:
    data = payload.movie_data
    external_id = data.external_id()
    if not external_id:
        raise MovieListError("No valid movie ID found")

    movie = db.scalar(select(Movie).where(Movie.movie_id == external_id))
    if movie is not None:
        # Older rows may have been stored with the wrong type.
        movie.type = data.type or DEFAULT_MOVIE_TYPE
        return movie

    movie = Movie(
        movie_id=external_id,
        title=data.title,
        poster=data.poster,
        year=data.year,
        rating=data.imdb_rating or data.rating,
        rating_source=data.rating_source or DEFAULT_RATING_SOURCE,
        type=data.type or DEFAULT_MOVIE_TYPE,
        description=data.plot,
    )
    db.add(movie)
    db.flush()
    return movie


def _adjust_saved_counter(db: Session, user_id: UUID, delta: int) -> None:
    """Best-effort counter update; :func:`sync_saved_movies` repairs drift."""

    if delta >= 0:
        new_value = Profile.saved_movies + delta
    else:
        new_value = case((Profile.saved_movies + delta > 0, Profile.saved_movies + delta), else_=0)
    try:
        db.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(saved_movies=new_value)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update saved_movies counter for %s", user_id)


def save_movie_status(db: Session, payload: MovieSavePayload) -> tuple[UserMovie, bool]:
    """Insert or update the user's status for a catalog movie.

    Returns the stored row and whether the movie is new to the user's lists.
    Status changes on an existing row leave the counter alone.
    """

    profile = _require_profile(db, payload.user_id)

    try:
        movie = _resolve_catalog_movie(db, payload)
        entry = db.scalar(
            select(UserMovie).where(UserMovie.user_id == payload.user_id, UserMovie.movie_id == movie.id)
        )
        is_new = entry is None
        if is_new:
            entry = UserMovie(user_id=payload.user_id, movie_id=movie.id)
            db.add(entry)

        imdb_id = payload.movie_data.imdb_id
        entry.user_email = payload.user_email or profile.user_email
        entry.movie_imdb_id = imdb_id if imdb_id and imdb_id != "N/A" else None
        entry.movie_name = payload.movie_data.title
        entry.status = payload.status
        entry.updated_at = utcnow()
        if payload.status == MOVIE_WATCHED:
            entry.watched_date = payload.watched_date or utcnow()
        db.commit()
    except MovieListError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save movie for %s", payload.user_id)
        raise StoreError("Failed to save movie") from exc

    if is_new:
        _adjust_saved_counter(db, payload.user_id, 1)

    db.refresh(entry)
    logger.info("Saved movie %s as %s for %s (new=%s)", movie.movie_id, payload.status, payload.user_id, is_new)
    return entry, is_new


def remove_movie(db: Session, *, user_id: UUID, movie_id: UUID) -> bool:
    try:
        result = db.execute(
            delete(UserMovie)
            .where(UserMovie.user_id == user_id, UserMovie.movie_id == movie_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to remove movie %s for %s", movie_id, user_id)
        raise StoreError("Failed to remove movie") from exc

    removed = bool(result.rowcount)
    if removed:
        _adjust_saved_counter(db, user_id, -1)
    return removed


def _user_movies_query(user_id: UUID):
    return (
        select(UserMovie)
        .options(selectinload(UserMovie.movie))
        .where(UserMovie.user_id == user_id)
        .order_by(UserMovie.updated_at.desc())
    )


def list_saved_movies(db: Session, user_id: UUID) -> list[UserMovie]:
    return list(db.scalars(_user_movies_query(user_id)))


def list_user_movies(
    db: Session,
    user_id: UUID,
    movie_status: str | None = None,
) -> list[UserMovie] | dict[str, list[UserMovie]]:
    """A flat list for one status, or all entries grouped under short keys."""

    if movie_status and movie_status != "all":
        if movie_status not in MOVIE_STATUSES:
            raise MovieListError("Invalid status")
        return list(db.scalars(_user_movies_query(user_id).where(UserMovie.status == movie_status)))

    grouped: dict[str, list[UserMovie]] = {key: [] for key in MOVIE_GROUP_KEYS.values()}
    for entry in db.scalars(_user_movies_query(user_id)):
        grouped[MOVIE_GROUP_KEYS[entry.status]].append(entry)
    return grouped


def movie_counts(db: Session, user_id: UUID) -> MovieCounts:
    rows = db.execute(
        select(UserMovie.status, func.count(UserMovie.id)).where(UserMovie.user_id == user_id).group_by(UserMovie.status)
    ).all()
    by_status = {row[0]: row[1] for row in rows}
    return MovieCounts(
        watched=by_status.get(MOVIE_WATCHED, 0),
        watching=by_status.get(MOVIE_WATCHING, 0),
        wishlist=by_status.get(MOVIE_WISHLIST, 0),
    )


def sync_saved_movies(db: Session, user_id: UUID) -> int:
    """Recount the user's list entries and persist the result on the profile."""

    profile = _require_profile(db, user_id)
    try:
        actual = db.scalar(select(func.count(UserMovie.id)).where(UserMovie.user_id == user_id)) or 0
        profile.saved_movies = actual
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to synchronise saved_movies for %s", user_id)
        raise StoreError("Failed to synchronise saved movies") from exc
    return actual


__all__ = [
    "MovieListError",
    "MovieCounts",
    "save_movie_status",
    "remove_movie",
    "list_saved_movies",
    "list_user_movies",
    "movie_counts",
    "sync_saved_movies",
]
