"""SQLAlchemy ORM model for user profiles mirrored from the identity provider."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cinecircle.constants import DEFAULT_ROLE
from cinecircle.database import Base

from .base import utcnow


class Profile(Base):
    __tablename__ = "profiles"

    # Issued by the identity provider, never generated here.
    id = Column(UUID(as_uuid=True), primary_key=True)
    first_name = Column(String(150), nullable=True)
    last_name = Column(String(150), nullable=True)
    username = Column(String(150), unique=True, nullable=True, index=True)
    user_email = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    saved_movies = Column(Integer, nullable=False, default=0, server_default="0")
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, server_default=DEFAULT_ROLE, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    movies = relationship("UserMovie", back_populates="profile", cascade="all, delete-orphan")
    friend_requests_sent = relationship(
        "FriendRequest",
        foreign_keys="FriendRequest.sender_id",
        back_populates="sender",
        cascade="all, delete-orphan",
    )
    friend_requests_received = relationship(
        "FriendRequest",
        foreign_keys="FriendRequest.receiver_id",
        back_populates="receiver",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"Profile(id={self.id!s}, username={self.username!r})"


__all__ = ["Profile"]
