from pydantic import BaseModel, ConfigDict
from typing import Optional

from .common import ApiStatus


class PipelineResult(BaseModel):
    """Result of a single pipeline execution"""

    model_config = ConfigDict(use_enum_values=True)

    status: ApiStatus
    message: str
    started_at: str
    completed_at: Optional[str] = None
    duration_seconds: Optional[float] = None
    records_processed: Optional[int] = None
    season: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[str] = None  # e.g. SOURCE_FETCH_FAILED, STORE_WRITE_FAILED


class PipelineResponse(BaseModel):
    """Response for a single pipeline trigger"""

    model_config = ConfigDict(use_enum_values=True)

    status: ApiStatus
    message: str
    data: Optional[PipelineResult] = None


class PipelineInfo(BaseModel):
    """Registry entry returned by the pipeline listing endpoint."""

    name: str
    display_name: str
    description: str
    target_table: str
    last_success_at: Optional[str] = None


class PipelineListResponse(BaseModel):
    """Response for listing registered pipelines."""

    pipelines: list[PipelineInfo]
