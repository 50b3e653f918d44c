"""Merged, reverse-chronological activity feeds.

Each feed is rebuilt on every call: rows from the sources are tagged,
merged, sorted on ``updated_at`` and only then paginated, so ``total`` and
``hasMore`` always describe the merged sequence.
"""
from __future__ import annotations

import logging
from typing import Iterable, Literal, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..config import get_settings
from ..models import FriendRequest, UserMovie
from ..schemas import FeedPage, FriendMovieLogEntry, FriendRequestLogEntry, MovieLogEntry
from .errors import StoreError
from .formatting import as_utc, feed_profile, movie_summary, paginate
from .relationship_store import get_friend_ids

logger = logging.getLogger(__name__)

UserLogType = Literal["movies", "friends", "all"]


def _friend_request_query():
    return select(FriendRequest).options(
        selectinload(FriendRequest.sender),
        selectinload(FriendRequest.receiver),
    )


def _fetch_friend_requests(db: Session, user_id: UUID) -> list[FriendRequest]:
    # Every status is included; accepted and rejected requests are history.
    stmt = (
        _friend_request_query()
        .where(or_(FriendRequest.sender_id == user_id, FriendRequest.receiver_id == user_id))
        .order_by(FriendRequest.created_at.desc())
    )
    return list(db.scalars(stmt))


def _recent_movie_activity(db: Session, user_ids: Sequence[UUID] | None, limit: int | None) -> list[UserMovie]:
    stmt = (
        select(UserMovie)
        .options(selectinload(UserMovie.profile), selectinload(UserMovie.movie))
        .order_by(UserMovie.updated_at.desc())
    )
    if user_ids is not None:
        stmt = stmt.where(UserMovie.user_id.in_(list(user_ids)))
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def _request_entry(request: FriendRequest, viewer_id: UUID | None = None) -> FriendRequestLogEntry:
    perspective = None
    other = None
    if viewer_id is not None:
        perspective = "sender" if request.sender_id == viewer_id else "receiver"
        other = request.receiver if perspective == "sender" else request.sender
    return FriendRequestLogEntry(
        id=request.id,
        sender_id=request.sender_id,
        receiver_id=request.receiver_id,
        sender_email=request.sender_email,
        receiver_email=request.receiver_email,
        status=request.status,
        created_at=request.created_at,
        updated_at=request.created_at,
        sender=feed_profile(request.sender),
        receiver=feed_profile(request.receiver),
        perspective=perspective,
        other_user=feed_profile(other),
    )


def _friend_movie_entry(entry: UserMovie) -> FriendMovieLogEntry:
    return FriendMovieLogEntry(
        id=entry.id,
        user_id=entry.user_id,
        status=entry.status,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        watched_date=entry.watched_date,
        friend=feed_profile(entry.profile),
        movie=movie_summary(entry.movie),
    )


def _movie_entry(entry: UserMovie) -> MovieLogEntry:
    return MovieLogEntry(
        id=entry.id,
        user_id=entry.user_id,
        status=entry.status,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        watched_date=entry.watched_date,
        user=feed_profile(entry.profile),
        movie=movie_summary(entry.movie),
    )


def _merge(*sources: Iterable) -> list:
    merged = [entry for source in sources for entry in source]
    merged.sort(key=lambda entry: as_utc(entry.updated_at), reverse=True)
    return merged


def get_friend_feed(
    db: Session,
    *,
    user_id: UUID,
    page: int = 1,
    page_size: int = 20,
    movie_limit: int | None = None,
) -> FeedPage:
    """Friend request history plus recent movie activity of the user's friends.

    Movie activity is capped to the ``movie_limit`` most recently updated
    records across all friends (``FEED_MOVIE_ACTIVITY_LIMIT`` by default), so
    old activity of a user with many active friends can fall out of the
    window. A failed friend request fetch aborts; a failure in the movie
    activity half is logged and the feed falls back to requests only.
    """

    if movie_limit is None:
        movie_limit = get_settings().feed_movie_activity_limit

    try:
        requests = _fetch_friend_requests(db, user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to fetch friend requests for feed of %s", user_id)
        raise StoreError("Failed to fetch friend requests") from exc
    request_entries = [_request_entry(request, user_id) for request in requests]

    movie_entries: list[FriendMovieLogEntry] = []
    try:
        friend_ids = get_friend_ids(db, user_id)
        if friend_ids:
            movie_entries = [_friend_movie_entry(entry) for entry in _recent_movie_activity(db, friend_ids, movie_limit)]
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Friend movie activity unavailable for %s; serving friend requests only", user_id)
        movie_entries = []

    window, pagination = paginate(_merge(request_entries, movie_entries), page=page, page_size=page_size)
    return FeedPage(data=window, pagination=pagination)


def get_user_logs(
    db: Session,
    *,
    log_type: UserLogType = "all",
    page: int = 1,
    page_size: int = 20,
    movie_limit: int | None = None,
) -> FeedPage:
    """Site-wide movie and friend request activity for administrators.

    Movie activity shares the friend feed's ``movie_limit`` window. Each
    source is optional; a source that fails to load is logged and left out
    of the merge.
    """

    if movie_limit is None:
        movie_limit = get_settings().feed_movie_activity_limit

    movie_entries: list[MovieLogEntry] = []
    request_entries: list[FriendRequestLogEntry] = []

    if log_type in ("movies", "all"):
        try:
            movie_entries = [_movie_entry(entry) for entry in _recent_movie_activity(db, None, movie_limit)]
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to fetch movie logs")

    if log_type in ("friends", "all"):
        try:
            stmt = _friend_request_query().order_by(FriendRequest.created_at.desc())
            request_entries = [_request_entry(request) for request in db.scalars(stmt)]
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to fetch friend request logs")

    window, pagination = paginate(_merge(movie_entries, request_entries), page=page, page_size=page_size)
    return FeedPage(data=window, pagination=pagination)


__all__ = ["UserLogType", "get_friend_feed", "get_user_logs"]
