"""
Season Stats API Routes

Public read endpoints over the stored player season rows.

Routes:
    GET  /v1/nba/season-stats          stored rows for a season, as persisted
    GET  /v1/nba/season-stats/table    rows projected into a view mode,
                                         formatted, filtered and sorted
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from core.logging import get_logger
from core.settings import settings
from db.base import db
from db.models.nba import PlayerSeasonStats
from pipelines.transformers import (
    PlayerSeasonRow,
    SortDirection,
    ViewMode,
    format_display_row,
    project,
    search_rows,
    sort_rows,
)
from pipelines.transformers.views import SORTABLE_COLUMNS, default_sort_direction
from schemas.common import ApiStatus
from schemas.stats import (
    ScoringSystem,
    SeasonStatsData,
    SeasonStatsResponse,
    SeasonTableData,
    SeasonTableResponse,
)

router = APIRouter(prefix="/nba", tags=["nba"])
log = get_logger("stats_api")


def parse_season(season: Optional[str]) -> int:
    """Parse the season query parameter; omitted means the configured season."""
    if season is None or not season.strip():
        return settings.nba_season
    try:
        return int(season.strip())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid season parameter")


def _fetch_season(season: int) -> list[dict]:
    with db.connection_context():
        return PlayerSeasonStats.for_season(season)


async def load_season(season: int) -> list[dict]:
    try:
        records = await asyncio.to_thread(_fetch_season, season)
    except Exception as e:
        log.error("season_stats_query_failed", season=season, error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Error fetching stats from database: {e}",
        ) from e
    log.info("season_stats_fetched", season=season, count=len(records))
    return records


@router.get("/season-stats", response_model=SeasonStatsResponse)
async def get_season_stats(
    season: Optional[str] = Query(None, description="Season start year, e.g. 2024"),
) -> SeasonStatsResponse:
    """Return every stored player row for a season, unsorted."""
    season_num = parse_season(season)
    records = await load_season(season_num)

    return SeasonStatsResponse(
        status=ApiStatus.SUCCESS,
        message=f"Fetched {len(records)} player rows for season {season_num}",
        data=SeasonStatsData(season=season_num, players=records),
    )


@router.get("/season-stats/table", response_model=SeasonTableResponse)
async def get_season_table(
    season: Optional[str] = Query(None, description="Season start year, e.g. 2024"),
    view: ViewMode = Query(ViewMode.PER_GAME, description="perGame, totals or perMinute"),
    scoring: ScoringSystem = Query(ScoringSystem.UNDERDOG, description="UD or DK"),
    sort: Optional[str] = Query(None, description="Column to sort by; defaults to the fantasy column"),
    direction: Optional[SortDirection] = Query(None, description="ascending or descending"),
    search: Optional[str] = Query(None, description="Filter on player name, team or position"),
) -> SeasonTableResponse:
    """
    Return a season as display rows.

    Values are projected into the requested view mode and rendered as
    strings. The default order is the selected scoring system's fantasy
    points, highest first.
    """
    season_num = parse_season(season)
    sort_key = sort or scoring.fantasy_column
    if sort_key not in SORTABLE_COLUMNS:
        raise HTTPException(status_code=400, detail=f"Invalid sort column '{sort_key}'")
    sort_direction = direction or default_sort_direction(sort_key)

    records = await load_season(season_num)
    display_rows = [project(PlayerSeasonRow.from_record(r), view) for r in records]
    display_rows = sort_rows(search_rows(display_rows, search), sort_key, sort_direction)

    return SeasonTableResponse(
        status=ApiStatus.SUCCESS,
        message=f"Fetched {len(display_rows)} player rows for season {season_num}",
        data=SeasonTableData(
            season=season_num,
            view=view.value,
            scoring=scoring,
            fantasy_column=scoring.fantasy_column,
            sort=sort_key,
            direction=SortDirection(sort_direction).value,
            search=search,
            count=len(display_rows),
            rows=[format_display_row(row, view) for row in display_rows],
        ),
    )
