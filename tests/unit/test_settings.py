"""Tests for settings validation."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.settings import Settings


class TestSettings:
    """Tests for Settings defaults and validators."""

    def test_defaults(self, monkeypatch) -> None:
        for key in ("NBA_SEASON", "UPSERT_CHUNK_SIZE", "STATS_PAGE_SIZE", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.nba_season == 2024
        assert settings.stats_page_size == 100
        assert settings.stats_page_delay == 0.1
        assert settings.upsert_chunk_size == 500

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("NBA_SEASON", "2023")
        monkeypatch.setenv("BALLDONTLIE_API_KEY", "abc")

        settings = Settings(_env_file=None)

        assert settings.nba_season == 2023
        assert settings.balldontlie_api_key.get_secret_value() == "abc"

    def test_log_level_normalized(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_chunk_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, upsert_chunk_size=0)
