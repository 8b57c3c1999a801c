"""
Pipeline Registry and Exports

Provides a registry of all available pipelines and helper functions
for running them by name.
"""

from typing import Optional, Type

from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.errors import PipelineError, SourceFetchError, StoreWriteError
from pipelines.season_stats import SeasonStatsPipeline
from schemas.pipeline import PipelineResult


# Registry of all available pipelines
PIPELINE_REGISTRY: dict[str, Type[BasePipeline]] = {
    "season_stats": SeasonStatsPipeline,
}


def get_pipeline(name: str) -> BasePipeline:
    """
    Get a pipeline instance by name.

    Args:
        name: Pipeline name (e.g., "season_stats")

    Returns:
        Instantiated pipeline

    Raises:
        KeyError: If pipeline name not found
    """
    if name not in PIPELINE_REGISTRY:
        available = ", ".join(PIPELINE_REGISTRY.keys())
        raise KeyError(f"Unknown pipeline '{name}'. Available: {available}")

    return PIPELINE_REGISTRY[name]()


async def run_pipeline(name: str, season: Optional[int] = None) -> PipelineResult:
    """
    Run a pipeline by name.

    Args:
        name: Pipeline name
        season: Season to process; the pipeline's default when omitted

    Returns:
        PipelineResult with status and details
    """
    pipeline = get_pipeline(name)
    return await pipeline.run(season=season)


def list_pipelines() -> list[dict]:
    """
    List all available pipelines with their configurations.

    Returns:
        List of pipeline info dicts
    """
    return [cls.get_info() for cls in PIPELINE_REGISTRY.values()]


__all__ = [
    # Base classes
    "BasePipeline",
    "PipelineConfig",
    "PipelineContext",
    # Errors
    "PipelineError",
    "SourceFetchError",
    "StoreWriteError",
    # Pipelines
    "SeasonStatsPipeline",
    # Registry functions
    "PIPELINE_REGISTRY",
    "get_pipeline",
    "run_pipeline",
    "list_pipelines",
]
