"""
Stat View Transformer

Read-time projection of season rows into one of three display modes
(per-game, season totals, per-minute), plus the formatting, sorting and
search helpers used by the stats table.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from pipelines.transformers.names import full_name, normalize_name
from pipelines.transformers.summary import PlayerSeasonRow


class ViewMode(str, Enum):
    PER_GAME = "perGame"
    TOTALS = "totals"
    PER_MINUTE = "perMinute"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


RATE_STATS = ("pts", "reb", "ast", "stl", "blk", "turnover", "ud_fp", "dk_fp")
FANTASY_FIELDS = ("ud_fp", "dk_fp")
TEXT_COLUMNS = ("player_name", "first_name", "team_abbreviation", "position")

DEFAULT_PRECISION = 1
PER_MINUTE_PRECISION = 2


@dataclass(frozen=True)
class DisplayRow:
    """Numeric display values of one player for a single view mode."""

    player_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    team_abbreviation: str
    position: str
    gp: int
    min: float
    pts: float
    reb: float
    ast: float
    stl: float
    blk: float
    turnover: float
    ud_fp: float
    dk_fp: float

    @property
    def player_name(self) -> str:
        return full_name(self.first_name, self.last_name)


NUMERIC_DISPLAY_FIELDS = (
    "gp", "min", "pts", "reb", "ast", "stl", "blk", "turnover", "ud_fp", "dk_fp",
)
SORTABLE_COLUMNS = TEXT_COLUMNS + NUMERIC_DISPLAY_FIELDS


def _per_minute(total: float, total_min: float) -> float:
    return total / total_min if total_min > 0 else 0.0


def project(row: PlayerSeasonRow, view_mode: ViewMode = ViewMode.PER_GAME) -> DisplayRow:
    """
    Compute the display values of a season row for a view mode.

    perGame uses the stored averages, totals the stored totals (fantasy
    totals are the approximated ones), perMinute divides each total by
    total minutes and shows 0 when there are none. gp is always the
    games-played count, and minutes stay per-game in perMinute.
    """
    view_mode = ViewMode(view_mode)

    if view_mode is ViewMode.TOTALS:
        values = {stat: getattr(row, f"total_{stat}") for stat in RATE_STATS}
        minutes = row.total_min
    elif view_mode is ViewMode.PER_MINUTE:
        values = {
            stat: _per_minute(getattr(row, f"total_{stat}"), row.total_min)
            for stat in RATE_STATS
        }
        minutes = row.min
    else:
        values = {stat: getattr(row, stat) for stat in RATE_STATS}
        minutes = row.min

    return DisplayRow(
        player_id=row.player_id,
        first_name=row.first_name,
        last_name=row.last_name,
        team_abbreviation=row.team_abbreviation,
        position=row.position,
        gp=row.gp,
        min=minutes,
        **values,
    )


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_stat(value, precision: int = DEFAULT_PRECISION, as_integer: bool = False) -> str:
    """Render one numeric value; missing or non-finite values render as zero."""
    if not _is_number(value):
        return "0" if as_integer else f"{0:.{precision}f}"
    if as_integer:
        return str(_round_half_up(value))
    return f"{value:.{precision}f}"


def format_display_row(
    display: DisplayRow, view_mode: ViewMode = ViewMode.PER_GAME
) -> dict[str, str]:
    """
    Render a display row as strings for the table.

    gp is always a whole number. In totals mode the counting stats are
    whole numbers too, while minutes and fantasy points keep decimals.
    """
    view_mode = ViewMode(view_mode)
    precision = PER_MINUTE_PRECISION if view_mode is ViewMode.PER_MINUTE else DEFAULT_PRECISION

    formatted: dict[str, str] = {
        "player_id": str(display.player_id),
        "player_name": display.player_name,
        "team_abbreviation": display.team_abbreviation or "N/A",
        "position": display.position or "N/A",
    }
    for name in NUMERIC_DISPLAY_FIELDS:
        as_integer = name == "gp" or (
            view_mode is ViewMode.TOTALS and name not in FANTASY_FIELDS and name != "min"
        )
        field_precision = DEFAULT_PRECISION if name == "min" else precision
        formatted[name] = format_stat(getattr(display, name), field_precision, as_integer)
    return formatted


def default_sort_direction(key: str) -> SortDirection:
    """Text columns sort A-Z first, stat columns highest first."""
    return SortDirection.ASCENDING if key in TEXT_COLUMNS else SortDirection.DESCENDING


def sort_rows(
    rows: Iterable[DisplayRow],
    key: str,
    direction: Optional[SortDirection] = None,
) -> list[DisplayRow]:
    """
    Sort display rows by a column.

    Player name sorts on the lower-cased "first last" string. Rows with a
    missing value for the column always sort last. The sort is stable.
    """
    if key not in SORTABLE_COLUMNS:
        raise ValueError(f"Unknown sort column '{key}'")
    direction = SortDirection(direction) if direction else default_sort_direction(key)
    reverse = direction is SortDirection.DESCENDING

    if key in ("player_name", "first_name"):
        def sort_value(row: DisplayRow):
            return normalize_name(row.player_name)
    else:
        def sort_value(row: DisplayRow):
            return getattr(row, key)

    rows = list(rows)
    present = [row for row in rows if sort_value(row) is not None]
    missing = [row for row in rows if sort_value(row) is None]
    return sorted(present, key=sort_value, reverse=reverse) + missing


def search_rows(rows: Iterable[DisplayRow], query: Optional[str]) -> list[DisplayRow]:
    """Keep rows whose player name, team or position contains the query."""
    rows = list(rows)
    needle = normalize_name(query)
    if not needle:
        return rows
    return [
        row
        for row in rows
        if needle in normalize_name(row.player_name)
        or needle in normalize_name(row.team_abbreviation)
        or needle in normalize_name(row.position)
    ]
