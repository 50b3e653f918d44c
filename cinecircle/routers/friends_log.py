"""Activity feed routes."""
from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..schemas import FeedPage
from ..services import get_friend_feed, get_user_logs, require_elevated
from ..services.auth_service import ensure_actor, get_token_subject

router = APIRouter(tags=["activity"])


def _page_size(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.feed_default_page_size
    return min(limit, settings.feed_max_page_size)


@router.get("/friends-log", response_model=FeedPage)
async def friends_log(
    user_id: UUID = Query(..., alias="userId"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> FeedPage:
    ensure_actor(subject, user_id)
    return get_friend_feed(db, user_id=user_id, page=page, page_size=_page_size(limit))


@router.get("/user-logs", response_model=FeedPage)
async def user_logs(
    requester_id: UUID = Query(..., alias="requesterId"),
    log_type: Literal["movies", "friends", "all"] = Query("all", alias="type"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    subject: UUID | None = Depends(get_token_subject),
    db: Session = Depends(get_session),
) -> FeedPage:
    ensure_actor(subject, requester_id)
    require_elevated(db, requester_id)
    return get_user_logs(db, log_type=log_type, page=page, page_size=_page_size(limit))
