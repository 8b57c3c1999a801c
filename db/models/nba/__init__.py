"""
NBA Schema Models

Season-level player statistics computed from balldontlie game logs.
"""

from db.models.nba.player_season_stats import PlayerSeasonStats

__all__ = [
    "PlayerSeasonStats",
]
