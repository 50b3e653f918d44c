"""Pydantic schemas for catalog movies and per-user movie lists."""
from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MovieStatus = Literal["watched", "currently_watching", "wishlist"]


class CatalogMovie(BaseModel):
    """Movie metadata as returned by the external catalog search."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(..., alias="Title", min_length=1)
    year: str | None = Field(default=None, alias="Year")
    poster: str | None = Field(default=None, alias="Poster")
    imdb_id: str | None = Field(default=None, alias="imdbID")
    tmdb_id: str | None = Field(default=None, alias="tmdbID")
    type: str | None = Field(default=None, alias="Type")
    imdb_rating: str | None = Field(default=None, alias="imdbRating")
    rating: str | None = None
    rating_source: str | None = Field(default=None, alias="ratingSource")
    plot: str | None = Field(default=None, alias="Plot")

    def external_id(self) -> str | None:
        """Prefer the IMDb id and fall back to the TMDB id."""

        if self.imdb_id and self.imdb_id != "N/A":
            return self.imdb_id
        return self.tmdb_id or None


class MovieSavePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    movie_data: CatalogMovie = Field(..., alias="movieData")
    status: MovieStatus
    watched_date: datetime | None = Field(default=None, alias="watchedDate")
    user_email: str | None = Field(default=None, alias="userEmail")


class MovieSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    movie_id: str
    title: str
    poster: str | None = None
    year: str | None = None
    rating: str | None = None
    rating_source: str | None = None
    type: str | None = None
    description: str | None = None


class UserMovieItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: MovieStatus
    watched_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    movie: MovieSummary | None = None


class GroupedMovies(BaseModel):
    watched: list[UserMovieItem]
    watching: list[UserMovieItem]
    wishlist: list[UserMovieItem]


class UserMoviesResponse(BaseModel):
    movies: list[UserMovieItem] | GroupedMovies


class SaveMovieResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    is_new: bool = Field(..., alias="isNew")
    data: UserMovieItem


class RemoveMovieResponse(BaseModel):
    success: bool
    message: str


class SyncSavedMoviesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")


class SyncSavedMoviesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    actual_count: int = Field(..., alias="actualCount")
    message: str


__all__ = [
    "MovieStatus",
    "CatalogMovie",
    "MovieSavePayload",
    "MovieSummary",
    "UserMovieItem",
    "GroupedMovies",
    "UserMoviesResponse",
    "SaveMovieResponse",
    "RemoveMovieResponse",
    "SyncSavedMoviesRequest",
    "SyncSavedMoviesResponse",
]
