"""
Pipeline Configuration

Immutable configuration dataclass for pipeline metadata.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for a pipeline.

    Attributes:
        name: Internal name used for tracking (e.g., "season_stats")
        display_name: Human-readable name (e.g., "Season Stats")
        description: What this pipeline does
        target_table: Primary table this pipeline writes to
    """

    name: str
    display_name: str
    description: str
    target_table: str

    def __post_init__(self):
        """Validate configuration."""
        if not self.name:
            raise ValueError("Pipeline name is required")
        if not self.target_table:
            raise ValueError("Pipeline target_table is required")
