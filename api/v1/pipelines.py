"""
Pipeline API Routes

Endpoints for triggering data pipelines. Uses token-based authentication
so cron jobs and scheduled tasks can trigger pipelines.

A triggered run executes to completion before the response is sent; the
HTTP status mirrors the outcome:
- 200: season rows written
- 502: the upstream stats source could not be read
- 500: storage failed or the server is misconfigured
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Query, Security
from fastapi.responses import JSONResponse

from core.logging import get_logger
from core.pipeline_auth import verify_pipeline_token
from db.base import db
from pipelines import SourceFetchError, list_pipelines, run_pipeline
from schemas.common import ApiStatus
from schemas.pipeline import PipelineListResponse, PipelineResponse, PipelineResult

router = APIRouter(prefix="/pipelines", tags=["pipelines"])
log = get_logger("pipeline_api")


def _http_status(result: PipelineResult) -> int:
    if result.status == ApiStatus.SUCCESS:
        return 200
    if result.error_code == SourceFetchError.error_code:
        return 502
    return 500


def _list_pipelines() -> list[dict]:
    with db.connection_context():
        return list_pipelines()


@router.get("/", response_model=PipelineListResponse)
async def get_available_pipelines(
    _: str = Security(verify_pipeline_token),
) -> PipelineListResponse:
    """
    List all available pipelines.

    Returns pipeline names, descriptions, target tables and the time of
    each pipeline's last successful run.
    """
    pipelines = await asyncio.to_thread(_list_pipelines)
    return PipelineListResponse(pipelines=pipelines)


@router.post("/season-stats", response_model=PipelineResponse)
async def trigger_season_stats(
    _: str = Security(verify_pipeline_token),
    season: Optional[int] = Query(
        None, ge=1946, le=2100, description="Season start year (e.g. 2024). Omit for the configured season."
    ),
) -> JSONResponse:
    """
    Trigger the season stats pipeline.

    Fetches every regular-season game log for the season from BALLDONTLIE,
    recomputes the per-player season rows and upserts them into
    player_season_stats.
    """
    log.info("season_stats_triggered", season=season)
    result = await run_pipeline("season_stats", season=season)

    response = PipelineResponse(
        status=result.status,
        message=result.message,
        data=result,
    )
    return JSONResponse(
        status_code=_http_status(result),
        content=response.model_dump(),
    )
