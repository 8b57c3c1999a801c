"""
Pipeline Context

Per-run state: the audit record, a bound logger, timing and the
records counter. Produces the PipelineResult a run returns.
"""

from __future__ import annotations

import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Any

import pytz

from core.logging import get_logger
from db.models.pipeline_run import PipelineRun
from schemas.pipeline import PipelineResult
from schemas.common import ApiStatus

CENTRAL_TZ = pytz.timezone("US/Central")


def _now() -> datetime:
    return datetime.now(CENTRAL_TZ)


@dataclass
class PipelineContext:
    """
    Execution context handed to BasePipeline.execute().

    Usage:
        ctx = PipelineContext("season_stats", season=2024)
        ctx.start_tracking()
        try:
            ctx.increment_records(10)
            return ctx.mark_success()
        except Exception as e:
            return ctx.mark_failed(e)
    """

    pipeline_name: str
    season: Optional[int] = None
    run_id: uuid.UUID = field(default_factory=uuid.uuid4)
    started_at: datetime = field(default_factory=_now)
    records_processed: int = 0

    _db_run: Optional[PipelineRun] = field(default=None, repr=False)
    _log: Any = field(default=None, repr=False)

    def __post_init__(self):
        self._log = get_logger("pipeline").bind(
            pipeline=self.pipeline_name,
            run_id=str(self.run_id),
            season=self.season,
        )

    @property
    def log(self):
        """Logger bound to this run's pipeline, run id and season."""
        return self._log

    def start_tracking(self) -> None:
        """Create the PipelineRun audit record and adopt its id."""
        self._db_run = PipelineRun.start_run(self.pipeline_name, season=self.season)
        self.run_id = self._db_run.id
        self._log = self._log.bind(run_id=str(self.run_id))
        self._log.info("pipeline_started")

    def increment_records(self, count: int = 1) -> None:
        self.records_processed += count

    def _result(self, status: ApiStatus, message: str, **extra: Any) -> PipelineResult:
        completed_at = _now()
        return PipelineResult(
            status=status,
            message=message,
            started_at=self.started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_seconds=(completed_at - self.started_at).total_seconds(),
            records_processed=self.records_processed,
            season=self.season,
            **extra,
        )

    def mark_success(self, message: Optional[str] = None) -> PipelineResult:
        """Close the run as successful."""
        if self._db_run:
            self._db_run.mark_success(records_processed=self.records_processed)

        result = self._result(
            ApiStatus.SUCCESS,
            message or f"{self.pipeline_name} completed successfully",
        )
        self._log.info(
            "pipeline_completed",
            records_processed=self.records_processed,
            duration_seconds=result.duration_seconds,
        )
        return result

    def mark_failed(self, error: Exception) -> PipelineResult:
        """
        Close the run as failed.

        The error's error_code, when it has one, is carried on the result
        so callers can tell a fetch failure from a store failure.
        """
        error_msg = f"{type(error).__name__}: {error}"
        error_code = getattr(error, "error_code", None)

        if self._db_run:
            self._db_run.mark_failed(error_msg)

        self._log.error(
            "pipeline_failed",
            error=error_msg,
            error_code=error_code,
            traceback=traceback.format_exc(),
        )
        return self._result(
            ApiStatus.ERROR,
            f"{self.pipeline_name} failed",
            error=error_msg,
            error_code=error_code,
        )
