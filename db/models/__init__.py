# Import all models to ensure they are registered with the database
from .pipeline_run import PipelineRun
from .nba.player_season_stats import PlayerSeasonStats

__all__ = [
    'PipelineRun', 'PlayerSeasonStats'
]
