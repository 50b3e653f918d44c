"""Persistence for symmetric friendships and pending-request lookups.

A friendship between A and B is stored as the two rows (A, B) and (B, A).
Only :func:`upsert_friendship_pair` and :func:`delete_friendship_pair` write
to the ``friends`` table, and both always touch the pair together. Neither
commits: the caller owns the surrounding transaction.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import Session

from ..constants import (
    REQUEST_PENDING,
    STATUS_FRIENDS,
    STATUS_NONE,
    STATUS_REQUEST_RECEIVED,
    STATUS_REQUEST_SENT,
)
from ..models import FriendRequest, Friendship, Profile


@dataclass(frozen=True, slots=True)
class RelationshipStatus:
    status: str
    request_id: UUID | None = None

    @property
    def is_friend(self) -> bool:
        return self.status == STATUS_FRIENDS


@dataclass(frozen=True, slots=True)
class FriendRecord:
    friend: Profile
    friendship_date: datetime


def _pair_clause(first: UUID, second: UUID):
    return or_(
        and_(Friendship.user_id == first, Friendship.friend_id == second),
        and_(Friendship.user_id == second, Friendship.friend_id == first),
    )


def friendship_exists(db: Session, user_id: UUID, friend_id: UUID) -> bool:
    stmt = select(Friendship.id).where(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
    return db.scalar(stmt) is not None


def upsert_friendship_pair(db: Session, first: UUID, second: UUID) -> None:
    """Ensure both directions exist; rows already present are left untouched."""

    if first == second:
        raise ValueError("a friendship needs two distinct users")

    owners = set(db.scalars(select(Friendship.user_id).where(_pair_clause(first, second))))
    for owner, other in ((first, second), (second, first)):
        if owner not in owners:
            db.add(Friendship(user_id=owner, friend_id=other))
    db.flush()


def delete_friendship_pair(db: Session, first: UUID, second: UUID) -> int:
    """Delete both directions regardless of which side is stored as the owner."""

    result = db.execute(delete(Friendship).where(_pair_clause(first, second)))
    return int(result.rowcount or 0)


def get_friend_ids(db: Session, user_id: UUID) -> list[UUID]:
    return list(db.scalars(select(Friendship.friend_id).where(Friendship.user_id == user_id)))


def get_friends_of(db: Session, user_id: UUID) -> list[FriendRecord]:
    stmt = (
        select(Friendship, Profile)
        .join(Profile, Profile.id == Friendship.friend_id)
        .where(Friendship.user_id == user_id)
        .order_by(Friendship.created_at.desc())
    )
    return [FriendRecord(friend=profile, friendship_date=friendship.created_at) for friendship, profile in db.execute(stmt)]


def find_pending_request(db: Session, sender_id: UUID, receiver_id: UUID) -> FriendRequest | None:
    stmt = select(FriendRequest).where(
        FriendRequest.sender_id == sender_id,
        FriendRequest.receiver_id == receiver_id,
        FriendRequest.status == REQUEST_PENDING,
    )
    return db.scalars(stmt).first()


def find_pending_between(db: Session, first: UUID, second: UUID) -> FriendRequest | None:
    return find_pending_request(db, first, second) or find_pending_request(db, second, first)


def get_relationship_status(db: Session, user_id: UUID, target_id: UUID) -> RelationshipStatus:
    if friendship_exists(db, user_id, target_id):
        return RelationshipStatus(STATUS_FRIENDS)

    sent = find_pending_request(db, user_id, target_id)
    if sent is not None:
        return RelationshipStatus(STATUS_REQUEST_SENT, request_id=sent.id)

    received = find_pending_request(db, target_id, user_id)
    if received is not None:
        return RelationshipStatus(STATUS_REQUEST_RECEIVED, request_id=received.id)

    return RelationshipStatus(STATUS_NONE)


__all__ = [
    "RelationshipStatus",
    "FriendRecord",
    "friendship_exists",
    "upsert_friendship_pair",
    "delete_friendship_pair",
    "get_friend_ids",
    "get_friends_of",
    "find_pending_request",
    "find_pending_between",
    "get_relationship_status",
]
