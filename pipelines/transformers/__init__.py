"""
Data Transformers

Pure functions for turning raw stat lines into season rows and
display-ready table rows.
"""

from pipelines.transformers.aggregation import (
    GameStat,
    PlayerSeasonAggregate,
    aggregate_season,
    normalize_game_stat,
)
from pipelines.transformers.fantasy_points import (
    StatLine,
    calculate_draftkings_points,
    calculate_underdog_points,
)
from pipelines.transformers.minutes import MinutesKind, classify_minutes, parse_minutes
from pipelines.transformers.names import full_name, normalize_name
from pipelines.transformers.summary import (
    PlayerSeasonRow,
    build_season_rows,
    summarize,
)
from pipelines.transformers.views import (
    DisplayRow,
    SortDirection,
    ViewMode,
    default_sort_direction,
    format_display_row,
    project,
    search_rows,
    sort_rows,
)

__all__ = [
    "GameStat",
    "PlayerSeasonAggregate",
    "aggregate_season",
    "normalize_game_stat",
    "StatLine",
    "calculate_draftkings_points",
    "calculate_underdog_points",
    "MinutesKind",
    "classify_minutes",
    "parse_minutes",
    "full_name",
    "normalize_name",
    "PlayerSeasonRow",
    "build_season_rows",
    "summarize",
    "DisplayRow",
    "SortDirection",
    "ViewMode",
    "default_sort_direction",
    "format_display_row",
    "project",
    "search_rows",
    "sort_rows",
]
