"""
Season Aggregation Transformer

Folds raw per-game stat lines (balldontlie /stats records) into one
running-total record per player.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from pipelines.transformers.minutes import parse_minutes


STAT_FIELDS = ("pts", "reb", "ast", "stl", "blk", "turnover", "fg3m")

# Earlier than any real game date; dates compare as ISO strings
DATE_SENTINEL = "1900-01-01"

UNKNOWN = "N/A"


def _number(value: Any) -> float:
    """Coerce a raw stat value to float; missing or non-numeric is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


@dataclass(frozen=True)
class GameStat:
    """A single qualifying game line after ingestion-boundary normalization."""

    player_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    position: str
    team_abbreviation: Optional[str]
    game_date: Optional[str]
    minutes: float
    pts: float = 0.0
    reb: float = 0.0
    ast: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    turnover: float = 0.0
    fg3m: float = 0.0


def normalize_game_stat(raw: Mapping[str, Any]) -> Optional[GameStat]:
    """
    Validate and normalize one raw stat record.

    Returns None when the record is not a game appearance: no player id,
    null/absent minutes, or minutes that do not parse to a positive value.
    Every numeric category is coerced to a float here so the scoring and
    aggregation code never sees a missing value.
    """
    if not raw:
        return None

    player = raw.get("player") or {}
    player_id = player.get("id")
    if not player_id or raw.get("min") is None:
        return None

    minutes = parse_minutes(raw["min"])
    if not minutes > 0:
        return None

    team = raw.get("team") or None
    game = raw.get("game") or {}

    return GameStat(
        player_id=player_id,
        first_name=player.get("first_name"),
        last_name=player.get("last_name"),
        position=player.get("position") or UNKNOWN,
        team_abbreviation=team.get("abbreviation") if team else None,
        game_date=game.get("date") or None,
        minutes=minutes,
        **{field: _number(raw.get(field)) for field in STAT_FIELDS},
    )


@dataclass
class PlayerSeasonAggregate:
    """
    Running season totals for one player.

    Owned by a single aggregation run. Name and position come from the first
    game seen. The team changes only when a game dated strictly later than
    latest_game_date arrives and that game names a team.
    """

    player_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: str = UNKNOWN
    team_abbreviation: Optional[str] = None
    games_played: int = 0
    total_min: float = 0.0
    total_pts: float = 0.0
    total_reb: float = 0.0
    total_ast: float = 0.0
    total_stl: float = 0.0
    total_blk: float = 0.0
    total_turnover: float = 0.0
    total_fg3m: float = 0.0
    latest_game_date: str = DATE_SENTINEL

    @classmethod
    def from_game(cls, game: GameStat) -> "PlayerSeasonAggregate":
        """Seed an empty aggregate with the player info of its first game."""
        return cls(
            player_id=game.player_id,
            first_name=game.first_name,
            last_name=game.last_name,
            position=game.position,
            team_abbreviation=game.team_abbreviation,
        )

    def add_game(self, game: GameStat) -> None:
        """Fold one qualifying game into the running totals."""
        self.games_played += 1
        self.total_min += game.minutes
        for field in STAT_FIELDS:
            total_field = f"total_{field}"
            setattr(self, total_field, getattr(self, total_field) + getattr(game, field))

        # Team only moves on a strictly later game date
        if game.game_date and game.game_date > self.latest_game_date:
            self.latest_game_date = game.game_date
            if game.team_abbreviation:
                self.team_abbreviation = game.team_abbreviation


def aggregate_season(
    records: Iterable[Mapping[str, Any]],
) -> dict[int, PlayerSeasonAggregate]:
    """
    Fold raw stat records into a player_id -> PlayerSeasonAggregate mapping.

    Records that are not qualifying games are skipped. Team attribution is
    driven by the latest game date rather than the last record seen.
    """
    aggregates: dict[int, PlayerSeasonAggregate] = {}

    for raw in records:
        game = normalize_game_stat(raw)
        if game is None:
            continue

        aggregate = aggregates.get(game.player_id)
        if aggregate is None:
            aggregate = aggregates[game.player_id] = PlayerSeasonAggregate.from_game(game)
        aggregate.add_game(game)

    return aggregates
