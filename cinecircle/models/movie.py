"""ORM models for catalog movies and per-user movie statuses."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cinecircle.constants import MOVIE_STATUSES
from cinecircle.database import Base

from .base import TimestampMixin, utcnow


class Movie(Base):
    """A catalog title referenced by one or more user lists."""

    __tablename__ = "movies"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # External catalog identifier (IMDb id, TMDB id as fallback).
    movie_id = Column(String(64), unique=True, nullable=False, index=True)
    title = Column(String(512), nullable=False)
    poster = Column(String(1024), nullable=True)
    year = Column(String(16), nullable=True)
    rating = Column(String(16), nullable=True)
    rating_source = Column(String(32), nullable=True, default="IMDB")
    type = Column(String(32), nullable=False, default="movie", server_default="movie")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    entries = relationship("UserMovie", back_populates="movie")


class UserMovie(TimestampMixin, Base):
    """A user's status for a single catalog movie."""

    __tablename__ = "user_movies"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(UUID(as_uuid=True), ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email = Column(String(255), nullable=True)
    movie_imdb_id = Column(String(64), nullable=True)
    movie_name = Column(String(512), nullable=True)
    status = Column(Enum(*MOVIE_STATUSES, name="user_movie_status"), nullable=False)
    watched_date = Column(DateTime(timezone=True), nullable=True)

    profile = relationship("Profile", back_populates="movies")
    movie = relationship("Movie", back_populates="entries")

    __table_args__ = (UniqueConstraint("user_id", "movie_id", name="uq_user_movie"),)


__all__ = ["Movie", "UserMovie"]
