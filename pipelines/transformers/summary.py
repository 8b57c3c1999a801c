"""
Season Summary Transformer

Turns running season aggregates into the persisted per-player season row:
totals, per-game averages, and both fantasy scores.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Iterable, Mapping, Optional

from pipelines.transformers.aggregation import (
    PlayerSeasonAggregate,
    UNKNOWN,
    aggregate_season,
)
from pipelines.transformers.fantasy_points import (
    calculate_draftkings_points,
    calculate_underdog_points,
)
from pipelines.transformers.names import full_name


AVERAGED_FIELDS = ("min", "pts", "reb", "ast", "stl", "blk", "turnover", "fg3m")


@dataclass(frozen=True)
class PlayerSeasonRow:
    """
    One player's season line, keyed by (player_id, season).

    Attributes:
        gp: Games played
        min, pts, reb, ast, stl, blk, turnover: Per-game averages
        ud_fp, dk_fp: Fantasy points of the per-game average line
        total_*: Season totals
        total_ud_fp, total_dk_fp: Average-line fantasy points times games played.
            Exact for Underdog (linear). Approximate for DraftKings: the
            double/triple-double bonus is applied once to the average line,
            not summed over individual games.
    """

    player_id: int
    season: int
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
    total_min: float
    total_pts: float
    total_reb: float
    total_ast: float
    total_stl: float
    total_blk: float
    total_turnover: float
    total_fg3m: float
    total_ud_fp: float
    total_dk_fp: float

    def to_record(self) -> dict[str, Any]:
        """Column mapping for the player_season_stats table."""
        return asdict(self)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PlayerSeasonRow":
        """Build a row from a stored record, ignoring extra columns."""
        return cls(**{f.name: record[f.name] for f in fields(cls)})

    @property
    def player_name(self) -> str:
        return full_name(self.first_name, self.last_name)


ROW_COLUMNS = tuple(f.name for f in fields(PlayerSeasonRow))


def summarize(aggregate: PlayerSeasonAggregate, season: int) -> Optional[PlayerSeasonRow]:
    """
    Finalize a player's aggregate into a season row.

    Returns None for a player with no qualifying games.
    """
    gp = aggregate.games_played
    if gp == 0:
        return None

    averages = {
        field: getattr(aggregate, f"total_{field}") / gp for field in AVERAGED_FIELDS
    }
    ud_fp = calculate_underdog_points(averages)
    dk_fp = calculate_draftkings_points(averages)

    return PlayerSeasonRow(
        player_id=aggregate.player_id,
        season=season,
        first_name=aggregate.first_name,
        last_name=aggregate.last_name,
        team_abbreviation=aggregate.team_abbreviation or UNKNOWN,
        position=aggregate.position,
        gp=gp,
        min=averages["min"],
        pts=averages["pts"],
        reb=averages["reb"],
        ast=averages["ast"],
        stl=averages["stl"],
        blk=averages["blk"],
        turnover=averages["turnover"],
        ud_fp=ud_fp,
        dk_fp=dk_fp,
        total_min=aggregate.total_min,
        total_pts=aggregate.total_pts,
        total_reb=aggregate.total_reb,
        total_ast=aggregate.total_ast,
        total_stl=aggregate.total_stl,
        total_blk=aggregate.total_blk,
        total_turnover=aggregate.total_turnover,
        total_fg3m=aggregate.total_fg3m,
        total_ud_fp=ud_fp * gp,
        total_dk_fp=dk_fp * gp,
    )


def build_season_rows(
    records: Iterable[Mapping[str, Any]], season: int
) -> list[PlayerSeasonRow]:
    """
    Aggregate a full season of raw stat records into season rows.

    Rows are ordered by player_id so repeated runs over the same data
    produce identical output regardless of page order.
    """
    aggregates = aggregate_season(records)
    rows = (summarize(aggregates[player_id], season) for player_id in sorted(aggregates))
    return [row for row in rows if row is not None]
