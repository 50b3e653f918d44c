"""Tests for the merged friend activity feed and the administrative log."""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Iterator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete
from sqlalchemy.exc import OperationalError

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_cinecircle.db")

from cinecircle.constants import REQUEST_ACCEPTED, REQUEST_PENDING, REQUEST_REJECTED  # noqa: E402
from cinecircle.database import Base, SessionLocal, engine  # noqa: E402
from cinecircle.main import app  # noqa: E402
from cinecircle.models import FriendRequest, Friendship, Movie, Profile, UserMovie, pair_key_for  # noqa: E402
from cinecircle.services import activity_feed  # noqa: E402
from cinecircle.services.activity_feed import get_friend_feed, get_user_logs  # noqa: E402
from cinecircle.services.formatting import as_utc, paginate  # noqa: E402
from cinecircle.services.relationship_store import upsert_friendship_pair  # noqa: E402

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
REQUEST_MINUTES = [10, 30, 50, 70, 90]
MOVIE_MINUTES = [5, 20, 40, 60, 80, 100, 110]


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(Friendship))
        session.execute(delete(FriendRequest))
        session.execute(delete(UserMovie))
        session.execute(delete(Movie))
        session.execute(delete(Profile))
        session.commit()
    yield


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def _make_profile(username: str, *, role: str = "user") -> UUID:
    with SessionLocal() as session:
        profile = Profile(id=uuid4(), username=username, first_name=username.title(), user_email=f"{username}@example.com", role=role)
        session.add(profile)
        session.commit()
        return profile.id


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def _add_request(sender: UUID, receiver: UUID, status: str, minutes: int) -> UUID:
    with SessionLocal() as session:
        request = FriendRequest(
            sender_id=sender,
            receiver_id=receiver,
            status=status,
            pair_key=pair_key_for(sender, receiver),
            created_at=_at(minutes),
        )
        session.add(request)
        session.commit()
        return request.id


def _add_movie_activity(user_id: UUID, external_id: str, minutes: int) -> UUID:
    with SessionLocal() as session:
        movie = Movie(movie_id=external_id, title=f"Title {external_id}")
        session.add(movie)
        session.flush()
        entry = UserMovie(
            user_id=user_id,
            movie_id=movie.id,
            status="watched",
            created_at=_at(minutes),
            updated_at=_at(minutes),
        )
        session.add(entry)
        session.commit()
        return entry.id


@pytest.fixture()
def populated_feed() -> dict:
    """Five request events and seven friend movie events around one viewer."""

    viewer = _make_profile("viewer")
    friend = _make_profile("friend")
    stranger = _make_profile("stranger")
    with SessionLocal() as session:
        upsert_friendship_pair(session, viewer, friend)
        session.commit()

    statuses = [REQUEST_PENDING, REQUEST_ACCEPTED, REQUEST_REJECTED, REQUEST_PENDING, REQUEST_ACCEPTED]
    expected: dict[int, tuple[str, UUID]] = {}
    for index, minutes in enumerate(REQUEST_MINUTES):
        other = _make_profile(f"other{index}")
        if index % 2:
            request_id = _add_request(viewer, other, statuses[index], minutes)
        else:
            request_id = _add_request(other, viewer, statuses[index], minutes)
        expected[minutes] = ("friend_request", request_id)

    for index, minutes in enumerate(MOVIE_MINUTES):
        entry_id = _add_movie_activity(friend, f"tt{index:07d}", minutes)
        expected[minutes] = ("friend_movie", entry_id)

    # Activity of non-friends never reaches the feed.
    _add_movie_activity(stranger, "tt9999999", 200)

    ordered = [expected[minutes] for minutes in sorted(expected, reverse=True)]
    return {"viewer": viewer, "friend": friend, "ordered": ordered}


def _ids(entries) -> list[tuple[str, UUID]]:
    return [(entry.log_type, entry.id) for entry in entries]


def test_first_page_holds_most_recent_entries_across_sources(populated_feed: dict) -> None:
    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=populated_feed["viewer"], page=1, page_size=5)

    assert _ids(page.data) == populated_feed["ordered"][:5]
    assert page.pagination.total == 12
    assert page.pagination.total_pages == 3
    assert page.pagination.has_more is True


def test_last_page_holds_the_remainder(populated_feed: dict) -> None:
    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=populated_feed["viewer"], page=3, page_size=5)

    assert _ids(page.data) == populated_feed["ordered"][10:]
    assert page.pagination.total == 12
    assert page.pagination.has_more is False


def test_request_entries_carry_viewer_perspective(populated_feed: dict) -> None:
    viewer = populated_feed["viewer"]
    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=viewer, page=1, page_size=20)

    requests = [entry for entry in page.data if entry.log_type == "friend_request"]
    assert len(requests) == 5
    for entry in requests:
        if entry.sender_id == viewer:
            assert entry.perspective == "sender"
            assert entry.other_user.id == entry.receiver_id
        else:
            assert entry.perspective == "receiver"
            assert entry.other_user.id == entry.sender_id
        assert entry.updated_at == entry.created_at

    movies = [entry for entry in page.data if entry.log_type == "friend_movie"]
    assert {entry.friend.username for entry in movies} == {"friend"}
    assert all(entry.movie is not None for entry in movies)


def test_movie_activity_window_is_capped(populated_feed: dict) -> None:
    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=populated_feed["viewer"], page=1, page_size=20, movie_limit=3)

    movies = [entry for entry in page.data if entry.log_type == "friend_movie"]
    assert page.pagination.total == 8
    assert [as_utc(entry.updated_at) for entry in movies] == [_at(110), _at(100), _at(80)]


def test_user_without_friends_sees_only_requests() -> None:
    loner = _make_profile("loner")
    other = _make_profile("other")
    _add_request(other, loner, REQUEST_PENDING, 15)

    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=loner, page=1, page_size=20)

    assert [entry.log_type for entry in page.data] == ["friend_request"]
    assert page.pagination.total == 1


def test_movie_activity_failure_degrades_to_requests(populated_feed: dict, monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken(*_args, **_kwargs):
        raise OperationalError("SELECT user_movies", {}, Exception("connection reset"))

    monkeypatch.setattr(activity_feed, "_recent_movie_activity", _broken)

    with SessionLocal() as session:
        page = get_friend_feed(session, user_id=populated_feed["viewer"], page=1, page_size=20)

    assert {entry.log_type for entry in page.data} == {"friend_request"}
    assert page.pagination.total == 5


def test_friend_request_failure_aborts_the_feed(
    client: TestClient, populated_feed: dict, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken(*_args, **_kwargs):
        raise OperationalError("SELECT friend_requests", {}, Exception("connection reset"))

    monkeypatch.setattr(activity_feed, "_fetch_friend_requests", _broken)

    response = client.get("/friends-log", params={"userId": str(populated_feed["viewer"])})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch friend requests"}


def test_feed_route_shape_and_page_size_cap(client: TestClient, populated_feed: dict) -> None:
    response = client.get("/friends-log", params={"userId": str(populated_feed["viewer"]), "page": 1, "limit": 500})

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 100, "total": 12, "totalPages": 1, "hasMore": False}
    assert body["data"][0]["log_type"] == "friend_movie"
    assert body["data"][0]["friend"]["username"] == "friend"


def test_feed_route_rejects_non_positive_pages(client: TestClient) -> None:
    viewer = _make_profile("viewer")

    assert client.get("/friends-log", params={"userId": str(viewer), "page": 0}).status_code == 400
    assert client.get("/friends-log", params={"userId": str(viewer), "limit": 0}).status_code == 400


def test_user_logs_require_elevated_requester(client: TestClient, populated_feed: dict) -> None:
    admin = _make_profile("admin", role="superadmin")

    denied = client.get("/user-logs", params={"requesterId": str(populated_feed["viewer"])})
    everything = client.get("/user-logs", params={"requesterId": str(admin), "limit": 50})
    friends_only = client.get("/user-logs", params={"requesterId": str(admin), "type": "friends"})

    assert denied.status_code == 403
    assert denied.json()["accessDenied"] is True
    assert everything.status_code == 200
    # Site-wide: the stranger's movie is included, but there is no viewer perspective.
    assert everything.json()["pagination"]["total"] == 13
    assert everything.json()["data"][0]["log_type"] == "movie"
    assert everything.json()["data"][0]["user"]["username"] == "stranger"
    assert {entry["log_type"] for entry in friends_only.json()["data"]} == {"friend_request"}
    assert all(entry["perspective"] is None for entry in friends_only.json()["data"])



def test_user_logs_movie_window_is_capped(populated_feed: dict) -> None:
    with SessionLocal() as session:
        page = get_user_logs(session, log_type="movies", page=1, page_size=20, movie_limit=3)

    assert page.pagination.total == 3
    assert [as_utc(entry.updated_at) for entry in page.data] == [_at(200), _at(110), _at(100)]


def test_paginate_counts_before_slicing() -> None:
    window, pagination = paginate(list(range(12)), page=2, page_size=5)

    assert window == [5, 6, 7, 8, 9]
    assert (pagination.total, pagination.total_pages, pagination.has_more) == (12, 3, True)

    empty, empty_pagination = paginate([], page=1, page_size=5)
    assert empty == []
    assert (empty_pagination.total, empty_pagination.total_pages, empty_pagination.has_more) == (0, 0, False)

    with pytest.raises(ValueError):
        paginate([1], page=0, page_size=5)
