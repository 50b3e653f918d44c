"""Tests for the symmetric friendship store and derived relationship status."""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Iterator
from uuid import UUID, uuid4

import pytest
from sqlalchemy import delete, func, select

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_cinecircle.db")

from cinecircle.constants import REQUEST_ACCEPTED, REQUEST_PENDING  # noqa: E402
from cinecircle.database import Base, SessionLocal, engine  # noqa: E402
from cinecircle.models import FriendRequest, Friendship, Movie, Profile, UserMovie, pair_key_for  # noqa: E402
from cinecircle.services.relationship_store import (  # noqa: E402
    delete_friendship_pair,
    friendship_exists,
    get_friend_ids,
    get_friends_of,
    get_relationship_status,
    upsert_friendship_pair,
)


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


def _make_profile(username: str) -> UUID:
    with SessionLocal() as session:
        profile = Profile(id=uuid4(), username=username, first_name=username.title(), user_email=f"{username}@example.com")
        session.add(profile)
        session.commit()
        return profile.id


def _add_request(sender_id: UUID, receiver_id: UUID, status: str = REQUEST_PENDING) -> UUID:
    with SessionLocal() as session:
        request = FriendRequest(
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=status,
            pair_key=pair_key_for(sender_id, receiver_id),
        )
        session.add(request)
        session.commit()
        return request.id


def _friendship_rows(first: UUID, second: UUID) -> int:
    with SessionLocal() as session:
        return session.scalar(
            select(func.count(Friendship.id)).where(
                ((Friendship.user_id == first) & (Friendship.friend_id == second))
                | ((Friendship.user_id == second) & (Friendship.friend_id == first))
            )
        )


def test_upsert_creates_both_directions_and_is_idempotent() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")

    with SessionLocal() as session:
        upsert_friendship_pair(session, alice, bob)
        session.commit()
        upsert_friendship_pair(session, bob, alice)
        session.commit()

        assert friendship_exists(session, alice, bob)
        assert friendship_exists(session, bob, alice)

    assert _friendship_rows(alice, bob) == 2


def test_upsert_repairs_a_half_written_pair() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")
    with SessionLocal() as session:
        session.add(Friendship(user_id=alice, friend_id=bob))
        session.commit()

    with SessionLocal() as session:
        upsert_friendship_pair(session, alice, bob)
        session.commit()

    assert _friendship_rows(alice, bob) == 2


def test_upsert_rejects_self_friendship() -> None:
    alice = _make_profile("alice")
    with SessionLocal() as session:
        with pytest.raises(ValueError):
            upsert_friendship_pair(session, alice, alice)


def test_delete_pair_removes_both_rows_from_either_side() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")
    with SessionLocal() as session:
        upsert_friendship_pair(session, alice, bob)
        session.commit()

    with SessionLocal() as session:
        removed = delete_friendship_pair(session, bob, alice)
        session.commit()

    assert removed == 2
    assert _friendship_rows(alice, bob) == 0


def test_relationship_status_reports_exactly_one_state() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")
    carol = _make_profile("carol")
    dave = _make_profile("dave")

    sent_id = _add_request(alice, bob)
    with SessionLocal() as session:
        upsert_friendship_pair(session, alice, carol)
        session.commit()

    with SessionLocal() as session:
        sent = get_relationship_status(session, alice, bob)
        received = get_relationship_status(session, bob, alice)
        friends = get_relationship_status(session, carol, alice)
        nothing = get_relationship_status(session, alice, dave)

    assert (sent.status, sent.request_id) == ("request_sent", sent_id)
    assert (received.status, received.request_id) == ("request_received", sent_id)
    assert friends.status == "friends" and friends.is_friend and friends.request_id is None
    assert nothing.status == "none" and not nothing.is_friend


def test_historical_requests_do_not_resurrect_pending_state() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")
    _add_request(alice, bob, status=REQUEST_ACCEPTED)
    with SessionLocal() as session:
        upsert_friendship_pair(session, alice, bob)
        session.commit()
        delete_friendship_pair(session, alice, bob)
        session.commit()

        assert get_relationship_status(session, alice, bob).status == "none"
        assert get_relationship_status(session, bob, alice).status == "none"


def test_friends_are_listed_newest_friendship_first() -> None:
    alice = _make_profile("alice")
    bob = _make_profile("bob")
    carol = _make_profile("carol")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)

    with SessionLocal() as session:
        session.add_all(
            [
                Friendship(user_id=alice, friend_id=bob, created_at=base),
                Friendship(user_id=bob, friend_id=alice, created_at=base),
                Friendship(user_id=alice, friend_id=carol, created_at=base + timedelta(days=1)),
                Friendship(user_id=carol, friend_id=alice, created_at=base + timedelta(days=1)),
            ]
        )
        session.commit()

    with SessionLocal() as session:
        records = get_friends_of(session, alice)
        assert [record.friend.username for record in records] == ["carol", "bob"]
        assert set(get_friend_ids(session, alice)) == {bob, carol}
        assert get_friend_ids(session, bob) == [alice]
