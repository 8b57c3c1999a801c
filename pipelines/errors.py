"""
Pipeline Errors

Failures a pipeline reports to its caller. Each carries a stable
error_code that ends up on the PipelineResult and decides the HTTP
status of a triggered run.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_FAILED"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class SourceFetchError(PipelineError):
    """The upstream stats source could not be read. Nothing was written."""

    error_code = "SOURCE_FETCH_FAILED"


class StoreWriteError(PipelineError):
    """Season rows could not be persisted."""

    error_code = "STORE_WRITE_FAILED"


__all__ = [
    "PipelineError",
    "SourceFetchError",
    "StoreWriteError",
]
