"""Shared pytest fixtures for season stats tests.

This module contains fixtures used across multiple test modules:
- Database fixtures (temporary SQLite file bound to the model proxy)
- Sample data fixtures (raw BALLDONTLIE /stats records)
- Settings fixtures (API key, pipeline token)

Example:
    def test_something(database, make_stat):
        # database is a fresh SQLite file with all tables created
        # make_stat builds a raw /stats record
        pass
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Generator

import pytest
from peewee import SqliteDatabase
from pydantic import SecretStr

from core.settings import settings
from db.base import bind_database


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Generator[SqliteDatabase, None, None]:
    """Bind a file-backed SQLite database and create tables.

    A file rather than :memory: so connections opened by worker threads
    see the same tables.
    """
    database = SqliteDatabase(str(tmp_path / "season_stats.db"))
    bind_database(database)

    yield database

    if not database.is_closed():
        database.close()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def pipeline_token(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure the pipeline bearer secret and return it."""
    token = "test-pipeline-token"
    monkeypatch.setattr(settings, "pipeline_api_token", SecretStr(token))
    return token


@pytest.fixture
def balldontlie_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure a BALLDONTLIE API key and return it."""
    key = "test-api-key"
    monkeypatch.setattr(settings, "balldontlie_api_key", SecretStr(key))
    return key


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def make_stat() -> Callable[..., dict[str, Any]]:
    """Return a factory for raw /stats records.

    Keyword arguments override stat categories; player, team and game
    details have their own keywords.
    """

    def _make(
        player_id: int = 7,
        first_name: str | None = "Test",
        last_name: str | None = "Player",
        position: str | None = "G",
        team: str | None = "LAL",
        date: str | None = "2024-01-01",
        min: Any = "30:00",
        **stats: Any,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": 1000 + player_id,
            "min": min,
            "pts": 0,
            "reb": 0,
            "ast": 0,
            "stl": 0,
            "blk": 0,
            "turnover": 0,
            "fg3m": 0,
            "player": {
                "id": player_id,
                "first_name": first_name,
                "last_name": last_name,
                "position": position,
            },
            "team": {"id": 1, "abbreviation": team} if team is not None else None,
            "game": {"id": 1, "date": date} if date is not None else {},
        }
        record.update(stats)
        return record

    return _make


@pytest.fixture
def two_game_records(make_stat: Callable[..., dict[str, Any]]) -> list[dict[str, Any]]:
    """Two games for player 7 on different teams and dates."""
    return [
        make_stat(
            pts=20, reb=5, ast=3, stl=1, blk=0, turnover=2,
            min="30:00", team="TMX", date="2024-01-01",
        ),
        make_stat(
            pts=10, reb=15, ast=12, stl=2, blk=1, turnover=1,
            min="35:00", team="TMY", date="2024-01-05",
        ),
    ]


@pytest.fixture
def season_records(
    make_stat: Callable[..., dict[str, Any]],
    two_game_records: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """A small season: three players, one DNP line and one player with no games."""
    return [
        *two_game_records,
        make_stat(
            player_id=3, first_name="Luka", last_name="Dončić", position="F-G",
            team="DAL", date="2024-01-02", min="36:00",
            pts=30, reb=10, ast=10, stl=1, blk=1, turnover=4, fg3m=4,
        ),
        make_stat(
            player_id=3, first_name="Luka", last_name="Dončić", position="F-G",
            team="DAL", date="2024-01-04", min=None,
        ),
        make_stat(
            player_id=12, first_name="Bench", last_name="Guy", position="",
            team="BOS", date="2024-01-03", min="12:30",
            pts=4, reb=2, ast=1,
        ),
        make_stat(
            player_id=99, first_name="Never", last_name="Played",
            team="NYK", date="2024-01-03", min="0:00",
        ),
    ]
