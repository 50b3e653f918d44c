"""Project-wide constant values."""
from __future__ import annotations

from typing import Final

# Friend request lifecycle
REQUEST_PENDING: Final = "pending"
REQUEST_ACCEPTED: Final = "accepted"
REQUEST_REJECTED: Final = "rejected"
FRIEND_REQUEST_STATUSES: Final = (REQUEST_PENDING, REQUEST_ACCEPTED, REQUEST_REJECTED)

# Derived relationship status between two users
STATUS_FRIENDS: Final = "friends"
STATUS_REQUEST_SENT: Final = "request_sent"
STATUS_REQUEST_RECEIVED: Final = "request_received"
STATUS_NONE: Final = "none"

# Per-user movie statuses
MOVIE_WATCHED: Final = "watched"
MOVIE_WATCHING: Final = "currently_watching"
MOVIE_WISHLIST: Final = "wishlist"
MOVIE_STATUSES: Final = (MOVIE_WATCHED, MOVIE_WATCHING, MOVIE_WISHLIST)

# Grouped listings use shorter keys than the stored statuses
MOVIE_GROUP_KEYS: Final = {
    MOVIE_WATCHED: "watched",
    MOVIE_WATCHING: "watching",
    MOVIE_WISHLIST: "wishlist",
}

UNKNOWN_COUNT: Final = "unknown"

DEFAULT_ROLE: Final = "user"

__all__ = [
    "REQUEST_PENDING",
    "REQUEST_ACCEPTED",
    "REQUEST_REJECTED",
    "FRIEND_REQUEST_STATUSES",
    "STATUS_FRIENDS",
    "STATUS_REQUEST_SENT",
    "STATUS_REQUEST_RECEIVED",
    "STATUS_NONE",
    "MOVIE_WATCHED",
    "MOVIE_WATCHING",
    "MOVIE_WISHLIST",
    "MOVIE_STATUSES",
    "MOVIE_GROUP_KEYS",
    "UNKNOWN_COUNT",
    "DEFAULT_ROLE",
]
