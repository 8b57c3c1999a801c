"""Tests for the season stats pipeline and the pipeline registry."""
from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests
from circuitbreaker import CircuitBreaker, CircuitBreakerError
from peewee import OperationalError

from core.resilience import ClientError, ResilientHTTPClient, ServerError
from db.models.nba import PlayerSeasonStats
from db.models.pipeline_run import PipelineRun
from pipelines import (
    PIPELINE_REGISTRY,
    SeasonStatsPipeline,
    SourceFetchError,
    StoreWriteError,
    get_pipeline,
    list_pipelines,
)
from pipelines.extractors import BalldontlieExtractor
from schemas.common import ApiStatus


def _extractor(records=None, error=None) -> MagicMock:
    extractor = MagicMock()
    if error is not None:
        extractor.get_season_stats.side_effect = error
    else:
        extractor.get_season_stats.return_value = records or []
    return extractor


class TestSeasonStatsPipeline:
    """Tests for SeasonStatsPipeline runs."""

    def test_success_writes_rows(self, database, season_records) -> None:
        extractor = _extractor(season_records)

        result = SeasonStatsPipeline(extractor=extractor).run_sync(2024)

        assert result.status == ApiStatus.SUCCESS
        assert result.records_processed == 3
        assert result.season == 2024
        assert result.error_code is None
        extractor.get_season_stats.assert_called_once_with(2024)
        assert len(PlayerSeasonStats.for_season(2024)) == 3

    def test_records_a_successful_run(self, database, season_records) -> None:
        SeasonStatsPipeline(extractor=_extractor(season_records)).run_sync(2024)

        run = PipelineRun.get_latest_successful("season_stats")
        assert run.season == 2024
        assert run.records_processed == 3

    def test_defaults_to_configured_season(self, database, monkeypatch) -> None:
        from core.settings import settings

        monkeypatch.setattr(settings, "nba_season", 2022)
        extractor = _extractor([])

        result = SeasonStatsPipeline(extractor=extractor).run_sync()

        extractor.get_season_stats.assert_called_once_with(2022)
        assert result.season == 2022

    def test_rerun_produces_identical_rows(self, database, season_records) -> None:
        pipeline = SeasonStatsPipeline(extractor=_extractor(season_records))
        pipeline.run_sync(2024)
        first = sorted(PlayerSeasonStats.for_season(2024), key=lambda r: r["player_id"])

        pipeline.run_sync(2024)
        second = sorted(PlayerSeasonStats.for_season(2024), key=lambda r: r["player_id"])

        assert first == second
        assert PlayerSeasonStats.select().count() == 3

    def test_no_qualifying_games_writes_nothing(self, database, make_stat) -> None:
        store = MagicMock()
        extractor = _extractor([make_stat(min="0:00"), make_stat(min=None)])

        result = SeasonStatsPipeline(extractor=extractor, store=store).run_sync(2024)

        assert result.status == ApiStatus.SUCCESS
        assert result.records_processed == 0
        store.upsert_rows.assert_not_called()

    def test_passes_chunk_size_to_store(self, database, season_records) -> None:
        store = MagicMock()
        store.upsert_rows.return_value = 3

        SeasonStatsPipeline(
            extractor=_extractor(season_records), store=store, chunk_size=2
        ).run_sync(2024)

        rows = store.upsert_rows.call_args.args[0]
        assert [row.player_id for row in rows] == [3, 7, 12]
        assert store.upsert_rows.call_args.kwargs == {"chunk_size": 2}

    @pytest.mark.parametrize(
        "error",
        [
            ServerError("Server error: 503", status_code=503),
            ClientError("Client error: 401", status_code=401),
            CircuitBreakerError(CircuitBreaker(name="balldontlie")),
        ],
    )
    def test_fetch_failure(self, database, error) -> None:
        store = MagicMock()

        result = SeasonStatsPipeline(
            extractor=_extractor(error=error), store=store
        ).run_sync(2024)

        assert result.status == ApiStatus.ERROR
        assert result.error_code == SourceFetchError.error_code == "SOURCE_FETCH_FAILED"
        assert result.error.startswith("SourceFetchError")
        store.upsert_rows.assert_not_called()

    def test_malformed_source_body_is_a_fetch_failure(self, database) -> None:
        """A 200 page that is not JSON surfaces as a fetch failure, not a crash."""
        response = MagicMock(spec=requests.Response)
        response.status_code = 200
        response.headers = {}
        response.text = "<html>"
        response.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
        extractor = BalldontlieExtractor(
            api_key="secret-key",
            page_delay=0,
            http_client=ResilientHTTPClient(
                max_retries=1, base_delay=0, max_delay=0, circuit_breaker=None
            ),
        )
        store = MagicMock()

        with patch("core.resilience.requests.request", return_value=response):
            result = SeasonStatsPipeline(extractor=extractor, store=store).run_sync(2024)

        assert result.status == ApiStatus.ERROR
        assert result.error_code == "SOURCE_FETCH_FAILED"
        store.upsert_rows.assert_not_called()

    def test_store_failure(self, database, season_records) -> None:
        store = MagicMock()
        store.upsert_rows.side_effect = OperationalError("database is locked")

        result = SeasonStatsPipeline(
            extractor=_extractor(season_records), store=store
        ).run_sync(2024)

        assert result.status == ApiStatus.ERROR
        assert result.error_code == StoreWriteError.error_code == "STORE_WRITE_FAILED"

        run = PipelineRun.select().order_by(PipelineRun.started_at.desc()).first()
        assert run.status == "failed"
        assert "database is locked" in run.error_message

    def test_unexpected_error_has_no_code(self, database) -> None:
        result = SeasonStatsPipeline(
            extractor=_extractor(error=RuntimeError("boom"))
        ).run_sync(2024)

        assert result.status == ApiStatus.ERROR
        assert result.error_code is None
        assert result.error == "RuntimeError: boom"

    def test_missing_api_key_fails_the_run(self, database, monkeypatch) -> None:
        from core.settings import settings

        monkeypatch.setattr(settings, "balldontlie_api_key", None)

        result = SeasonStatsPipeline().run_sync(2024)

        assert result.status == ApiStatus.ERROR
        assert "BALLDONTLIE_API_KEY" in result.error

    def test_async_run(self, database, season_records) -> None:
        """run() executes in a worker thread with its own connection."""
        pipeline = SeasonStatsPipeline(extractor=_extractor(season_records))

        result = asyncio.run(pipeline.run(2024))

        assert result.status == ApiStatus.SUCCESS
        assert len(PlayerSeasonStats.for_season(2024)) == 3


class TestRegistry:
    """Tests for the pipeline registry."""

    def test_registered(self) -> None:
        assert PIPELINE_REGISTRY == {"season_stats": SeasonStatsPipeline}

    def test_get_pipeline(self) -> None:
        assert isinstance(get_pipeline("season_stats"), SeasonStatsPipeline)

    def test_unknown_pipeline(self) -> None:
        with pytest.raises(KeyError, match="Available: season_stats"):
            get_pipeline("player_profiles")

    def test_list_pipelines(self, database) -> None:
        (info,) = list_pipelines()

        assert info["name"] == "season_stats"
        assert info["target_table"] == "player_season_stats"
        assert info["last_success_at"] is None
