"""Friend request API routes."""
from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..constants import REQUEST_ACCEPTED
from ..database import get_session
from ..models import FriendRequest
from ..schemas import (
    FriendRequestAction,
    FriendRequestActionResponse,
    FriendRequestCreate,
    FriendRequestCreateResponse,
    FriendRequestListItem,
    FriendRequestListResponse,
    FriendRequestRecord,
    MessageResponse,
)
from ..services import (
    cancel_friend_request,
    create_friend_request,
    list_friend_requests,
    respond_to_request,
)
from ..services.auth_service import ensure_actor, get_token_subject
from ..services.formatting import profile_summary

router = APIRouter(prefix="/friend-requests", tags=["friend-requests"])


def _list_item(request: FriendRequest, viewer_id: UUID) -> FriendRequestListItem:
    return FriendRequestListItem(
        id=request.id,
        sender_id=request.sender_id,
        receiver_id=request.receiver_id,
        status=request.status,
        created_at=request.created_at,
        direction="sent" if request.sender_id == viewer_id else "received",
        sender=profile_summary(request.sender),
        receiver=profile_summary(request.receiver),
    )


@router.get("", response_model=FriendRequestListResponse)
async def get_friend_requests(
    user_id: UUID = Query(..., alias="userId"),
    direction: Literal["received", "sent", "all"] = Query("received", alias="type"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> FriendRequestListResponse:
    ensure_actor(subject, user_id)
    requests = list_friend_requests(db, user_id=user_id, direction=direction)
    return FriendRequestListResponse(requests=[_list_item(request, user_id) for request in requests])


@router.post("", response_model=FriendRequestCreateResponse)
async def send_friend_request(
    payload: FriendRequestCreate,
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> FriendRequestCreateResponse:
    ensure_actor(subject, payload.sender_id)
    request = create_friend_request(db, sender_id=payload.sender_id, receiver_id=payload.receiver_id)
    return FriendRequestCreateResponse(
        request=FriendRequestRecord.model_validate(request),
        message="Friend request sent successfully",
    )


@router.patch("", response_model=FriendRequestActionResponse)
async def answer_friend_request(
    payload: FriendRequestAction,
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> FriendRequestActionResponse:
    ensure_actor(subject, payload.user_id)
    request = respond_to_request(
        db,
        request_id=payload.request_id,
        receiver_id=payload.user_id,
        action=payload.action,
    )
    verb = "accepted" if request.status == REQUEST_ACCEPTED else "rejected"
    return FriendRequestActionResponse(message=f"Friend request {verb}", status=request.status)


@router.delete("", response_model=MessageResponse)
async def cancel_request(
    request_id: UUID = Query(..., alias="requestId"),
    user_id: UUID = Query(..., alias="userId"),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> MessageResponse:
    ensure_actor(subject, user_id)
    cancel_friend_request(db, request_id=request_id, sender_id=user_id)
    return MessageResponse(message="Friend request cancelled")
