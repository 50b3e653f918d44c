"""Decides who may see a user's itemized movie lists."""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import status
from sqlalchemy.orm import Session

from ..config import get_settings
from ..models import Profile
from .errors import ServiceError
from .relationship_store import friendship_exists

logger = logging.getLogger(__name__)


class AccessDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied. You must be friends to view this user's movies."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail, extra={"accessDenied": True})


def is_elevated(profile: Profile | None) -> bool:
    if profile is None:
        return False
    role = (profile.role or "").strip().lower()
    return role in get_settings().elevated_role_set


def can_view(db: Session, requester_id: UUID | None, target_id: UUID) -> bool:
    """Self, elevated roles and friends may view; everyone else, anonymous included, may not."""

    if requester_id is None:
        return False
    if requester_id == target_id:
        return True
    if is_elevated(db.get(Profile, requester_id)):
        return True
    return friendship_exists(db, requester_id, target_id)


def require_view_access(db: Session, requester_id: UUID | None, target_id: UUID) -> None:
    if not can_view(db, requester_id, target_id):
        logger.info("Denied movie list access to %s for %s", target_id, requester_id)
        raise AccessDeniedError()


def require_elevated(db: Session, requester_id: UUID | None) -> Profile:
    profile = db.get(Profile, requester_id) if requester_id is not None else None
    if not is_elevated(profile):
        raise AccessDeniedError("Elevated role required")
    return profile


__all__ = [
    "AccessDeniedError",
    "is_elevated",
    "can_view",
    "require_view_access",
    "require_elevated",
]
