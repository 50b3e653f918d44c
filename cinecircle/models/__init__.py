"""Convenience exports for ORM models."""
from .friend_request import FriendRequest, pair_key_for
from .friendship import Friendship
from .movie import Movie, UserMovie
from .profile import Profile

__all__ = [
    "FriendRequest",
    "Friendship",
    "Movie",
    "Profile",
    "UserMovie",
    "pair_key_for",
]
