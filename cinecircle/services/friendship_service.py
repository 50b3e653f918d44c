"""Business logic for the friend request lifecycle and friendships.

Requests move ``pending -> accepted`` or ``pending -> rejected`` and never
leave a terminal state. A pending request can also disappear through
cancellation by its sender, which is the only way a request row is deleted.
"""
from __future__ import annotations

import logging
from typing import Literal
from uuid import UUID

from fastapi import status
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..constants import REQUEST_ACCEPTED, REQUEST_PENDING, REQUEST_REJECTED
from ..models import FriendRequest, Profile, pair_key_for
from .errors import ServiceError, StoreError
from .profile_service import get_profile_or_404
from .relationship_store import (
    delete_friendship_pair,
    find_pending_between,
    friendship_exists,
    upsert_friendship_pair,
)

logger = logging.getLogger(__name__)

RequestDirection = Literal["received", "sent", "all"]


class FriendshipError(ServiceError):
    """Base class for friend request and friendship failures."""


class InvalidFriendRequestError(FriendshipError):
    default_detail = "Invalid friend request"


class AlreadyFriendsError(FriendshipError):
    default_detail = "Already friends"


class DuplicateFriendRequestError(FriendshipError):
    default_detail = "Friend request already exists"


class FriendRequestNotFoundError(FriendshipError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Friend request not found"


class FriendRequestAlreadyProcessedError(FriendshipError):
    default_detail = "Friend request already processed"


class FriendshipMaterializationError(FriendshipError):
    """The request could not be accepted because the friendship rows failed to persist."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to create friendship; the request was left pending"


def _snapshot_emails(db: Session, sender_id: UUID, receiver_id: UUID) -> tuple[str | None, str | None]:
    """Best-effort lookup of both participants' current email."""

    try:
        rows = db.execute(
            select(Profile.id, Profile.user_email).where(Profile.id.in_([sender_id, receiver_id]))
        ).all()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Email snapshot lookup failed for friend request %s -> %s", sender_id, receiver_id)
        return None, None

    emails = {row.id: row.user_email for row in rows}
    return emails.get(sender_id), emails.get(receiver_id)


def create_friend_request(db: Session, *, sender_id: UUID, receiver_id: UUID) -> FriendRequest:
    if sender_id == receiver_id:
        raise InvalidFriendRequestError("Cannot send friend request to yourself")

    get_profile_or_404(db, receiver_id)

    if friendship_exists(db, sender_id, receiver_id):
        raise AlreadyFriendsError()

    if find_pending_between(db, sender_id, receiver_id) is not None:
        raise DuplicateFriendRequestError()

    sender_email, receiver_email = _snapshot_emails(db, sender_id, receiver_id)

    request = FriendRequest(
        sender_id=sender_id,
        receiver_id=receiver_id,
        sender_email=sender_email,
        receiver_email=receiver_email,
        status=REQUEST_PENDING,
        pair_key=pair_key_for(sender_id, receiver_id),
    )
    try:
        db.add(request)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # The partial unique index on pending pairs catches concurrent senders.
        if find_pending_between(db, sender_id, receiver_id) is not None:
            raise DuplicateFriendRequestError() from exc
        logger.exception("Failed to insert friend request %s -> %s", sender_id, receiver_id)
        raise StoreError("Failed to send friend request") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to insert friend request %s -> %s", sender_id, receiver_id)
        raise StoreError("Failed to send friend request") from exc

    db.refresh(request)
    logger.info("Friend request %s created (%s -> %s)", request.id, sender_id, receiver_id)
    return request


def respond_to_request(
    db: Session,
    *,
    request_id: UUID,
    receiver_id: UUID,
    action: Literal["accept", "reject"],
) -> FriendRequest:
    """Accept or reject a pending request addressed to ``receiver_id``.

    Acceptance writes the status change and both friendship rows in one
    transaction. If the friendship rows cannot be written the transaction is
    rolled back, leaving the request pending, and a fatal error is raised.
    """

    if action not in ("accept", "reject"):
        raise InvalidFriendRequestError('Invalid action. Must be "accept" or "reject"')

    request = db.scalar(
        select(FriendRequest).where(FriendRequest.id == request_id, FriendRequest.receiver_id == receiver_id)
    )
    if request is None:
        raise FriendRequestNotFoundError()
    if request.status != REQUEST_PENDING:
        raise FriendRequestAlreadyProcessedError()

    accept = action == "accept"
    new_status = REQUEST_ACCEPTED if accept else REQUEST_REJECTED
    sender_id = request.sender_id

    try:
        result = db.execute(
            update(FriendRequest)
            .where(
                FriendRequest.id == request_id,
                FriendRequest.receiver_id == receiver_id,
                FriendRequest.status == REQUEST_PENDING,
            )
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update friend request %s", request_id)
        raise StoreError("Failed to update friend request") from exc

    if not result.rowcount:
        # Another responder won the race between our read and the update.
        db.rollback()
        raise FriendRequestAlreadyProcessedError()

    try:
        if accept:
            upsert_friendship_pair(db, sender_id, receiver_id)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        if accept:
            logger.exception(
                "Friendship insert failed while accepting request %s (%s <-> %s); request left pending",
                request_id,
                sender_id,
                receiver_id,
            )
            raise FriendshipMaterializationError() from exc
        logger.exception("Failed to reject friend request %s", request_id)
        raise StoreError("Failed to update friend request") from exc

    db.refresh(request)
    logger.info("Friend request %s %s by %s", request_id, new_status, receiver_id)
    return request


def cancel_friend_request(db: Session, *, request_id: UUID, sender_id: UUID) -> bool:
    """Delete a pending request owned by ``sender_id``.

    A delete that matches nothing still succeeds: either way no pending
    request with that id from this sender remains.
    """

    stmt = (
        delete(FriendRequest)
        .where(
            FriendRequest.id == request_id,
            FriendRequest.sender_id == sender_id,
            FriendRequest.status == REQUEST_PENDING,
        )
        .execution_options(synchronize_session=False)
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to cancel friend request %s", request_id)
        raise StoreError("Failed to cancel friend request") from exc

    removed = bool(result.rowcount)
    if not removed:
        logger.info("Cancel of friend request %s by %s matched no pending row", request_id, sender_id)
    return removed


def list_friend_requests(db: Session, *, user_id: UUID, direction: RequestDirection = "received") -> list[FriendRequest]:
    stmt = select(FriendRequest).options(
        selectinload(FriendRequest.sender),
        selectinload(FriendRequest.receiver),
    )
    if direction == "sent":
        stmt = stmt.where(FriendRequest.sender_id == user_id)
    elif direction == "received":
        stmt = stmt.where(FriendRequest.receiver_id == user_id)
    else:
        stmt = stmt.where(or_(FriendRequest.sender_id == user_id, FriendRequest.receiver_id == user_id))
    return list(db.scalars(stmt.order_by(FriendRequest.created_at.desc())))


def unfriend(db: Session, *, user_id: UUID, friend_id: UUID) -> int:
    """Remove both friendship rows; either participant may call this."""

    if user_id == friend_id:
        raise InvalidFriendRequestError("Cannot unfriend yourself")

    try:
        removed = delete_friendship_pair(db, user_id, friend_id)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to remove friendship %s <-> %s", user_id, friend_id)
        raise StoreError("Failed to remove friend") from exc

    logger.info("Friendship %s <-> %s removed (%d rows)", user_id, friend_id, removed)
    return removed


__all__ = [
    "FriendshipError",
    "InvalidFriendRequestError",
    "AlreadyFriendsError",
    "DuplicateFriendRequestError",
    "FriendRequestNotFoundError",
    "FriendRequestAlreadyProcessedError",
    "FriendshipMaterializationError",
    "create_friend_request",
    "respond_to_request",
    "cancel_friend_request",
    "list_friend_requests",
    "unfriend",
]
