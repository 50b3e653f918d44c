"""create profiles, movies and user movie lists

Revision ID: 20261002_create_profiles_and_movies
Revises:
Create Date: 2026-10-02
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261002_create_profiles_and_movies"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("first_name", sa.String(length=150)),
        sa.Column("last_name", sa.String(length=150)),
        sa.Column("username", sa.String(length=150)),
        sa.Column("user_email", sa.String(length=255)),
        sa.Column("avatar_url", sa.String(length=1024)),
        sa.Column("saved_movies", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)
    op.create_index("ix_profiles_role", "profiles", ["role"])

    op.create_table(
        "movies",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("movie_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("poster", sa.String(length=1024)),
        sa.Column("year", sa.String(length=16)),
        sa.Column("rating", sa.String(length=16)),
        sa.Column("rating_source", sa.String(length=32)),
        sa.Column("type", sa.String(length=32), nullable=False, server_default="movie"),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_movies_movie_id", "movies", ["movie_id"], unique=True)

    user_movie_status = sa.Enum("watched", "currently_watching", "wishlist", name="user_movie_status")

    op.create_table(
        "user_movies",
        sa.Column("id", sa.dialects.postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("movie_id", sa.dialects.postgresql.UUID(as_uuid=True), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_email", sa.String(length=255)),
        sa.Column("movie_imdb_id", sa.String(length=64)),
        sa.Column("movie_name", sa.String(length=512)),
        sa.Column("status", user_movie_status, nullable=False),
        sa.Column("watched_date", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_user_movie"),
    )
    op.create_index("ix_user_movies_user_id", "user_movies", ["user_id"])
    op.create_index("ix_user_movies_movie_id", "user_movies", ["movie_id"])
    op.create_index("ix_user_movies_updated_at", "user_movies", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_user_movies_updated_at", table_name="user_movies")
    op.drop_index("ix_user_movies_movie_id", table_name="user_movies")
    op.drop_index("ix_user_movies_user_id", table_name="user_movies")
    op.drop_table("user_movies")
    sa.Enum(name="user_movie_status").drop(op.get_bind(), checkfirst=True)

    op.drop_index("ix_movies_movie_id", table_name="movies")
    op.drop_table("movies")

    op.drop_index("ix_profiles_role", table_name="profiles")
    op.drop_index("ix_profiles_username", table_name="profiles")
    op.drop_table("profiles")
