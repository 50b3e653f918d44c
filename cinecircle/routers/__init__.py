"""Aggregate router exports."""
from .friend_requests import router as friend_requests_router
from .friends import router as friends_router
from .friends_log import router as activity_router
from .movies import router as movies_router
from .movies import sync_router as movie_sync_router
from .users import router as users_router

__all__ = [
    "friend_requests_router",
    "friends_router",
    "activity_router",
    "movies_router",
    "movie_sync_router",
    "users_router",
]
