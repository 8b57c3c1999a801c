"""
Pipeline Run Model

Audit trail of pipeline executions. One row per run, opened as
'running' and closed as 'success' or 'failed'.
"""

import uuid
from datetime import datetime

from peewee import (
    UUIDField,
    CharField,
    DateTimeField,
    IntegerField,
    TextField,
)

from db.base import BaseModel


class PipelineRun(BaseModel):
    """
    Tracks individual pipeline execution runs.

    Attributes:
        id: Unique identifier for the run
        pipeline_name: Name of the pipeline (e.g., "season_stats")
        started_at: When the pipeline started
        completed_at: When the pipeline finished (null if still running)
        season: Season the run processed, when the pipeline is season-scoped
        status: Current status (running, success, failed)
        records_processed: Number of records processed
        error_message: Error details if failed
    """

    id = UUIDField(primary_key=True, default=uuid.uuid4)
    pipeline_name = CharField(max_length=50, index=True)
    started_at = DateTimeField()
    completed_at = DateTimeField(null=True)
    status = CharField(max_length=20, index=True)  # running, success, failed
    season = IntegerField(null=True, index=True)
    records_processed = IntegerField(default=0)
    error_message = TextField(null=True)

    class Meta:
        table_name = "pipeline_runs"

    def __repr__(self) -> str:
        return (
            f"<PipelineRun("
            f"id={self.id}, "
            f"pipeline={self.pipeline_name}, "
            f"status={self.status})>"
        )

    @classmethod
    def start_run(cls, pipeline_name: str, season: int | None = None) -> "PipelineRun":
        """
        Create a new pipeline run record with status 'running'.

        Args:
            pipeline_name: Name of the pipeline being run
            season: Season being processed, if any

        Returns:
            The created PipelineRun instance
        """
        return cls.create(
            id=uuid.uuid4(),
            pipeline_name=pipeline_name,
            season=season,
            started_at=datetime.utcnow(),
            status="running",
        )

    def mark_success(self, records_processed: int = 0) -> None:
        """Close the run as successful with its record count."""
        self.status = "success"
        self.completed_at = datetime.utcnow()
        self.records_processed = records_processed
        self.save()

    def mark_failed(self, error_message: str) -> None:
        """Close the run as failed with the error description."""
        self.status = "failed"
        self.completed_at = datetime.utcnow()
        self.error_message = error_message
        self.save()

    @classmethod
    def get_latest_successful(cls, pipeline_name: str) -> "PipelineRun | None":
        """
        Get the most recent successful run for a pipeline.

        Args:
            pipeline_name: Name of the pipeline

        Returns:
            The latest successful run, or None if none found
        """
        return (
            cls.select()
            .where(
                (cls.pipeline_name == pipeline_name) & (cls.status == "success")
            )
            .order_by(cls.completed_at.desc())
            .first()
        )
