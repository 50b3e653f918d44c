"""Friendship API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    FriendListItem,
    FriendsListResponse,
    MessageResponse,
    RelationshipCheckRequest,
    RelationshipStatusResponse,
)
from ..services import FriendRecord, get_friends_of, get_relationship_status, unfriend
from ..services.auth_service import ensure_actor, get_token_subject

router = APIRouter(prefix="/friends", tags=["friends"])


def _friend_item(record: FriendRecord) -> FriendListItem:
    friend = record.friend
    return FriendListItem(
        id=friend.id,
        first_name=friend.first_name,
        last_name=friend.last_name,
        username=friend.username,
        user_email=friend.user_email,
        avatar_url=friend.avatar_url,
        saved_movies=friend.saved_movies or 0,
        friendship_date=record.friendship_date,
    )


@router.get("", response_model=FriendsListResponse)
async def list_friends(
    user_id: UUID = Query(..., alias="userId"),
    db: Session = Depends(get_session),
) -> FriendsListResponse:
    return FriendsListResponse(friends=[_friend_item(record) for record in get_friends_of(db, user_id)])


@router.delete("", response_model=MessageResponse)
async def remove_friend(
    user_id: UUID = Query(..., alias="userId"),
    friend_id: UUID = Query(..., alias="friendId"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> MessageResponse:
    ensure_actor(subject, user_id)
    unfriend(db, user_id=user_id, friend_id=friend_id)
    return MessageResponse(message="Friend removed successfully")


@router.post("", response_model=RelationshipStatusResponse, response_model_exclude_none=True)
async def check_relationship(
    payload: RelationshipCheckRequest,
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> RelationshipStatusResponse:
    ensure_actor(subject, payload.user_id)
    relationship = get_relationship_status(db, payload.user_id, payload.target_user_id)
    return RelationshipStatusResponse(
        status=relationship.status,
        is_friend=relationship.is_friend,
        request_id=relationship.request_id,
    )
