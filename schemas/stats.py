"""
Season Stats Response Schemas

Pydantic models for the public season stats endpoints.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.common import ApiStatus


class ScoringSystem(str, Enum):
    """Fantasy scoring system shown in the table."""

    UNDERDOG = "UD"
    DRAFTKINGS = "DK"

    @property
    def fantasy_column(self) -> str:
        return "ud_fp" if self is ScoringSystem.UNDERDOG else "dk_fp"


class PlayerSeasonStatsRecord(BaseModel):
    """A stored season row, as persisted."""

    player_id: int
    season: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
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


class SeasonStatsData(BaseModel):
    season: int
    players: list[PlayerSeasonStatsRecord]


class SeasonStatsResponse(BaseModel):
    """Response for GET /v1/nba/season-stats."""

    model_config = ConfigDict(use_enum_values=True)

    status: ApiStatus
    message: str
    data: SeasonStatsData


class SeasonTableData(BaseModel):
    """A projected, formatted and ordered stats table."""

    model_config = ConfigDict(use_enum_values=True)

    season: int
    view: str
    scoring: ScoringSystem
    fantasy_column: str
    sort: str
    direction: str
    search: Optional[str] = None
    count: int
    rows: list[dict[str, str]]


class SeasonTableResponse(BaseModel):
    """Response for GET /v1/nba/season-stats/table."""

    model_config = ConfigDict(use_enum_values=True)

    status: ApiStatus
    message: str
    data: SeasonTableData
