"""add friend requests and symmetric friendships

Revision ID: 20261009_add_friend_requests_and_friends
Revises: 20261002_create_profiles_and_movies
Create Date: 2026-10-09
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261009_add_friend_requests_and_friends"
down_revision = "20261002_create_profiles_and_movies"
branch_labels = None
depends_on = None


def upgrade() -> None:
    friend_request_status = sa.Enum("pending", "accepted", "rejected", name="friend_request_status")

    op.create_table(
        "friend_requests",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("sender_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receiver_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sender_email", sa.String(length=255)),
        sa.Column("receiver_email", sa.String(length=255)),
        sa.Column("status", friend_request_status, nullable=False, server_default="pending"),
        sa.Column("pair_key", sa.String(length=80), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("sender_id <> receiver_id", name="ck_friend_request_not_self"),
    )
    op.create_index("ix_friend_requests_sender_id", "friend_requests", ["sender_id"])
    op.create_index("ix_friend_requests_receiver_id", "friend_requests", ["receiver_id"])
    op.create_index("ix_friend_requests_created_at", "friend_requests", ["created_at"])
    op.create_index(
        "uq_friend_requests_pending_pair",
        "friend_requests",
        ["pair_key"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "friends",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("friend_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "friend_id", name="uq_friendship_pair"),
        sa.CheckConstraint("user_id <> friend_id", name="ck_friendship_not_self"),
    )
    op.create_index("ix_friends_user_id", "friends", ["user_id"])
    op.create_index("ix_friends_friend_id", "friends", ["friend_id"])


def downgrade() -> None:
    op.drop_index("ix_friends_friend_id", table_name="friends")
    op.drop_index("ix_friends_user_id", table_name="friends")
    op.drop_table("friends")

    op.drop_index("uq_friend_requests_pending_pair", table_name="friend_requests")
    op.drop_index("ix_friend_requests_created_at", table_name="friend_requests")
    op.drop_index("ix_friend_requests_receiver_id", table_name="friend_requests")
    op.drop_index("ix_friend_requests_sender_id", table_name="friend_requests")
    op.drop_table("friend_requests")
    sa.Enum(name="friend_request_status").drop(op.get_bind(), checkfirst=True)
