"""Tests for the startup schema upgrade switches."""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_cinecircle.db")

from cinecircle.services import migrations  # noqa: E402


def test_disabled_flag_skips_the_upgrade(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unexpected(*_args, **_kwargs):
        raise AssertionError("alembic should not run")

    monkeypatch.setenv("DISABLE_AUTO_MIGRATIONS", "true")
    monkeypatch.setattr(migrations.command, "upgrade", _unexpected)

    assert migrations.run_migrations_if_needed(database_url="postgresql://db/cinecircle") is False


def test_upgrade_targets_head_with_the_given_url(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.delenv("DISABLE_AUTO_MIGRATIONS", raising=False)
    monkeypatch.setattr(migrations.command, "upgrade", lambda config, revision: calls.append((config, revision)))

    assert migrations.run_migrations_if_needed(database_url="postgresql://db/cinecircle") is True

    config, revision = calls[0]
    assert revision == "head"
    assert config.get_main_option("sqlalchemy.url") == "postgresql://db/cinecircle"
    assert config.get_main_option("script_location") == str(migrations.PROJECT_ROOT / "alembic")
