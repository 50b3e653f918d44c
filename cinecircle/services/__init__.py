"""Convenience exports for service layer."""
from .access_policy import AccessDeniedError, can_view, is_elevated, require_elevated, require_view_access
from .activity_feed import get_friend_feed, get_user_logs
from .errors import ServiceError, StoreError
from .friendship_service import (
    AlreadyFriendsError,
    DuplicateFriendRequestError,
    FriendRequestAlreadyProcessedError,
    FriendRequestNotFoundError,
    FriendshipError,
    FriendshipMaterializationError,
    InvalidFriendRequestError,
    cancel_friend_request,
    create_friend_request,
    list_friend_requests,
    respond_to_request,
    unfriend,
)
from .movie_list_service import (
    MovieCounts,
    MovieListError,
    list_saved_movies,
    list_user_movies,
    movie_counts,
    remove_movie,
    save_movie_status,
    sync_saved_movies,
)
from .profile_service import (
    ProfileNotFoundError,
    get_profile_or_404,
    get_profile_overview,
    list_suggested_profiles,
    list_top_profiles,
    search_profiles,
)
from .relationship_store import (
    FriendRecord,
    RelationshipStatus,
    delete_friendship_pair,
    friendship_exists,
    get_friends_of,
    get_relationship_status,
    upsert_friendship_pair,
)

__all__ = [
    "AccessDeniedError",
    "can_view",
    "is_elevated",
    "require_elevated",
    "require_view_access",
    "get_friend_feed",
    "get_user_logs",
    "ServiceError",
    "StoreError",
    "AlreadyFriendsError",
    "DuplicateFriendRequestError",
    "FriendRequestAlreadyProcessedError",
    "FriendRequestNotFoundError",
    "FriendshipError",
    "FriendshipMaterializationError",
    "InvalidFriendRequestError",
    "cancel_friend_request",
    "create_friend_request",
    "list_friend_requests",
    "respond_to_request",
    "unfriend",
    "MovieCounts",
    "MovieListError",
    "list_saved_movies",
    "list_user_movies",
    "movie_counts",
    "remove_movie",
    "save_movie_status",
    "sync_saved_movies",
    "ProfileNotFoundError",
    "get_profile_or_404",
    "get_profile_overview",
    "list_suggested_profiles",
    "list_top_profiles",
    "search_profiles",
    "FriendRecord",
    "RelationshipStatus",
    "delete_friendship_pair",
    "friendship_exists",
    "get_friends_of",
    "get_relationship_status",
    "upsert_friendship_pair",
]
