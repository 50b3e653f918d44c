"""Convenience exports for schema layer."""
from .feed import (
    ActivityEntry,
    FeedPage,
    FeedProfile,
    FriendMovieLogEntry,
    FriendRequestLogEntry,
    MovieLogEntry,
    Pagination,
)
from .friends import (
    FriendListItem,
    FriendRequestAction,
    FriendRequestActionResponse,
    FriendRequestCreate,
    FriendRequestCreateResponse,
    FriendRequestListItem,
    FriendRequestListResponse,
    FriendRequestRecord,
    FriendsListResponse,
    MessageResponse,
    RelationshipCheckRequest,
    RelationshipStatusResponse,
)
from .movies import (
    CatalogMovie,
    GroupedMovies,
    MovieSavePayload,
    MovieSummary,
    RemoveMovieResponse,
    SaveMovieResponse,
    SyncSavedMoviesRequest,
    SyncSavedMoviesResponse,
    UserMovieItem,
    UserMoviesResponse,
)
from .profiles import (
    ProfileCard,
    ProfileDetail,
    ProfileListResponse,
    ProfileOverviewResponse,
    ProfileStats,
    ProfileSummary,
)

__all__ = [
    "ActivityEntry",
    "FeedPage",
    "FeedProfile",
    "FriendMovieLogEntry",
    "FriendRequestLogEntry",
    "MovieLogEntry",
    "Pagination",
    "FriendListItem",
    "FriendRequestAction",
    "FriendRequestActionResponse",
    "FriendRequestCreate",
    "FriendRequestCreateResponse",
    "FriendRequestListItem",
    "FriendRequestListResponse",
    "FriendRequestRecord",
    "FriendsListResponse",
    "MessageResponse",
    "RelationshipCheckRequest",
    "RelationshipStatusResponse",
    "CatalogMovie",
    "GroupedMovies",
    "MovieSavePayload",
    "MovieSummary",
    "RemoveMovieResponse",
    "SaveMovieResponse",
    "SyncSavedMoviesRequest",
    "SyncSavedMoviesResponse",
    "UserMovieItem",
    "UserMoviesResponse",
    "ProfileCard",
    "ProfileDetail",
    "ProfileListResponse",
    "ProfileOverviewResponse",
    "ProfileStats",
    "ProfileSummary",
]
