"""ORM model representing directed friend requests between users."""
from __future__ import annotations

import uuid
from uuid import UUID as PyUUID

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cinecircle.constants import FRIEND_REQUEST_STATUSES, REQUEST_PENDING
from cinecircle.database import Base

from .base import utcnow


def pair_key_for(first: PyUUID, second: PyUUID) -> str:
    """Return the direction-independent key for a pair of users."""

    low, high = sorted((str(first), str(second)))
    return f"{low}:{high}"


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sender_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    # Point-in-time copies; intentionally not refreshed when a profile email changes.
    sender_email = Column(String(255), nullable=True)
    receiver_email = Column(String(255), nullable=True)
    status = Column(
        Enum(*FRIEND_REQUEST_STATUSES, name="friend_request_status"),
        nullable=False,
        default=REQUEST_PENDING,
        server_default=REQUEST_PENDING,
    )
    pair_key = Column(String(80), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True)

    sender = relationship("Profile", foreign_keys=[sender_id], back_populates="friend_requests_sent")
    receiver = relationship("Profile", foreign_keys=[receiver_id], back_populates="friend_requests_received")

    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="ck_friend_request_not_self"),
        # At most one pending request per unordered pair, whichever side sent it.
        Index(
            "uq_friend_requests_pending_pair",
            "pair_key",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )


__all__ = ["FriendRequest", "pair_key_for"]
