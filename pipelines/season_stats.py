"""
Season Stats Pipeline

Recomputes one season of player stats and fantasy scores from
BALLDONTLIE game logs and overwrites the stored season rows.
"""

from typing import Optional

from circuitbreaker import CircuitBreakerError
from peewee import PeeweeException
from tenacity import RetryError

from core.resilience import ClientError, RetryableError
from core.settings import settings
from db.models.nba import PlayerSeasonStats
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.errors import SourceFetchError, StoreWriteError
from pipelines.extractors import BalldontlieExtractor
from pipelines.transformers import build_season_rows
from schemas.pipeline import PipelineResult


FETCH_ERRORS = (RetryableError, ClientError, CircuitBreakerError, RetryError)


class SeasonStatsPipeline(BasePipeline):
    """
    Rebuild a season's player rows.

    This pipeline:
    1. Fetches every regular-season stat line for the season
    2. Aggregates qualifying games per player
    3. Summarizes averages, totals and fantasy points
    4. Upserts the rows keyed by (player_id, season)

    The fetch completes before anything is written, so a fetch failure
    leaves the stored season untouched.
    """

    config = PipelineConfig(
        name="season_stats",
        display_name="Season Stats",
        description="Recomputes per-player season averages, totals and fantasy points",
        target_table="player_season_stats",
    )

    def __init__(
        self,
        extractor: Optional[BalldontlieExtractor] = None,
        store: Optional[type[PlayerSeasonStats]] = None,
        chunk_size: Optional[int] = None,
    ):
        super().__init__()
        self._extractor = extractor
        self.store = store or PlayerSeasonStats
        self.chunk_size = chunk_size or settings.upsert_chunk_size

    @property
    def extractor(self) -> BalldontlieExtractor:
        # Built on first use so a missing API key fails the run, not the import
        if self._extractor is None:
            self._extractor = BalldontlieExtractor()
        return self._extractor

    def run_sync(self, season: Optional[int] = None) -> PipelineResult:
        return super().run_sync(season if season is not None else settings.nba_season)

    def execute(self, ctx: PipelineContext) -> None:
        """Execute the season stats pipeline."""
        season = ctx.season

        ctx.log.info("fetching_stats", season=season)
        try:
            records = self.extractor.get_season_stats(season)
        except FETCH_ERRORS as e:
            raise SourceFetchError(f"Failed to fetch stats for season {season}: {e}", cause=e) from e
        ctx.log.info("fetch_complete", record_count=len(records))

        rows = build_season_rows(records, season)
        ctx.log.info("stats_processed", player_count=len(rows))

        if not rows:
            ctx.log.warning("no_qualifying_games", season=season)
            return

        try:
            written = self.store.upsert_rows(rows, chunk_size=self.chunk_size)
        except PeeweeException as e:
            raise StoreWriteError(f"Failed to store season {season} rows: {e}", cause=e) from e

        ctx.increment_records(written)
