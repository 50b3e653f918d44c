"""Schemas for friend requests and friendship endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .profiles import ProfileSummary


class FriendRequestCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender_id: UUID = Field(..., alias="senderId")
    receiver_id: UUID = Field(..., alias="receiverId")


class FriendRequestAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    request_id: UUID = Field(..., alias="requestId")
    action: Literal["accept", "reject"]
    user_id: UUID = Field(..., alias="userId")


class RelationshipCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    target_user_id: UUID = Field(..., alias="targetUserId")


class FriendRequestRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_id: UUID
    receiver_id: UUID
    sender_email: str | None = None
    receiver_email: str | None = None
    status: str
    created_at: datetime


class FriendRequestCreateResponse(BaseModel):
    request: FriendRequestRecord
    message: str


class FriendRequestListItem(BaseModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    status: str
    created_at: datetime
    direction: Literal["sent", "received"]
    sender: ProfileSummary | None = None
    receiver: ProfileSummary | None = None


class FriendRequestListResponse(BaseModel):
    requests: list[FriendRequestListItem]


class FriendRequestActionResponse(BaseModel):
    message: str
    status: str


class MessageResponse(BaseModel):
    message: str


class FriendListItem(BaseModel):
    id: UUID
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    user_email: str | None = None
    avatar_url: str | None = None
    saved_movies: int = 0
    friendship_date: datetime


class FriendsListResponse(BaseModel):
    friends: list[FriendListItem]


class RelationshipStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["friends", "request_sent", "request_received", "none"]
    is_friend: bool = Field(..., alias="isFriend")
    request_id: UUID | None = Field(default=None, alias="requestId")


__all__ = [
    "FriendRequestCreate",
    "FriendRequestAction",
    "RelationshipCheckRequest",
    "FriendRequestRecord",
    "FriendRequestCreateResponse",
    "FriendRequestListItem",
    "FriendRequestListResponse",
    "FriendRequestActionResponse",
    "MessageResponse",
    "FriendListItem",
    "FriendsListResponse",
    "RelationshipStatusResponse",
]
