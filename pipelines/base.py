"""
Base Pipeline

Abstract base class for all data pipelines.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from db.base import db
from db.models.pipeline_run import PipelineRun
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from schemas.pipeline import PipelineResult


class BasePipeline(ABC):
    """
    Abstract base class for all data pipelines.

    Provides:
    - Automatic run tracking via PipelineContext
    - Structured logging with correlation IDs
    - Standardized error handling
    - Thread-based execution to avoid blocking the async event loop

    Subclasses must implement:
    - config: PipelineConfig class attribute
    - execute(): The actual pipeline logic (synchronous)

    Example:
        class SeasonStatsPipeline(BasePipeline):
            config = PipelineConfig(
                name="season_stats",
                display_name="Season Stats",
                description="Recomputes season rows from BALLDONTLIE game logs",
                target_table="player_season_stats",
            )

            def execute(self, ctx: PipelineContext) -> None:
                records = self.extractor.get_season_stats(ctx.season)
                ctx.increment_records(len(records))
    """

    # Class-level configuration - must be overridden by subclasses
    config: ClassVar[PipelineConfig]

    def __init__(self):
        """Initialize pipeline and validate configuration."""
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate that config is properly defined."""
        if getattr(self.__class__, "config", None) is None:
            raise ValueError(
                f"{self.__class__.__name__} must define a 'config' class attribute"
            )

    @abstractmethod
    def execute(self, ctx: PipelineContext) -> None:
        """
        Execute the pipeline logic.

        This is the main method subclasses implement. It runs in a separate
        thread to avoid blocking the async event loop. All synchronous I/O
        (HTTP requests, database calls) is safe to call directly here.

        Args:
            ctx: Pipeline context with logging, tracking, and timing

        Raises:
            Any exception will be caught and converted to a failed result
        """
        pass

    def run_sync(self, season: Optional[int] = None) -> PipelineResult:
        """
        Run the full pipeline lifecycle synchronously.

        Called via asyncio.to_thread() from run(), and directly by the CLI.
        Opens a DB connection for the current thread if there is none
        (Peewee uses thread-local connections) and closes only a
        connection it opened.
        """
        opened = db.is_closed()
        if opened:
            db.connect()

        try:
            ctx = PipelineContext(self.config.name, season=season)
            ctx.start_tracking()

            try:
                self.execute(ctx)
                return ctx.mark_success()
            except Exception as e:
                return ctx.mark_failed(e)
        finally:
            if opened and not db.is_closed():
                db.close()

    async def run(self, season: Optional[int] = None) -> PipelineResult:
        """
        Run the pipeline with full lifecycle management.

        This is the public entry point. The entire pipeline execution
        (including DB and HTTP I/O) runs in a thread pool worker via
        asyncio.to_thread() to avoid blocking the event loop.

        Args:
            season: Season start year the run should process

        Returns:
            PipelineResult with status, timing, and records processed
        """
        return await asyncio.to_thread(self.run_sync, season)

    @classmethod
    def get_info(cls) -> dict:
        """Get pipeline information for listing, including its last successful run."""
        last_run = PipelineRun.get_latest_successful(cls.config.name)
        return {
            "name": cls.config.name,
            "display_name": cls.config.display_name,
            "description": cls.config.description,
            "target_table": cls.config.target_table,
            "last_success_at": (
                last_run.completed_at.isoformat() if last_run and last_run.completed_at else None
            ),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.config.name})>"
