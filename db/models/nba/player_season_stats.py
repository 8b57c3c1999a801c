"""
Player Season Stats Table

One row per player per season: per-game averages, season totals and both
fantasy scores, as computed by the season stats pipeline. Each pipeline
run recomputes the whole season and overwrites the rows for its key.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    DoubleField,
    IntegerField,
    SmallIntegerField,
)

from core.logging import get_logger
from db.base import BaseModel

if TYPE_CHECKING:
    from pipelines.transformers.summary import PlayerSeasonRow

AUDIT_COLUMNS = ("id", "created_at", "updated_at")


class PlayerSeasonStats(BaseModel):
    """
    Season statistics for a player.

    Attributes:
        id: Auto-incrementing primary key
        player_id: balldontlie player ID
        season: Season start year (e.g., 2024 for 2024-25)
        first_name, last_name, position: Player info from the stat feed
        team_abbreviation: Team of the player's most recent game ('N/A' if unknown)
        gp: Games played
        min, pts, reb, ast, stl, blk, turnover: Per-game averages
        ud_fp, dk_fp: Per-game Underdog / DraftKings fantasy points
        total_*: Season totals
        total_ud_fp, total_dk_fp: Season fantasy points (average line x gp)
        created_at: When this record was first created
        updated_at: When this record was last overwritten
    """

    id = AutoField(primary_key=True)
    player_id = IntegerField()
    season = IntegerField(index=True)

    first_name = CharField(max_length=100, null=True)
    last_name = CharField(max_length=100, null=True)
    team_abbreviation = CharField(max_length=10)
    position = CharField(max_length=10)

    # Games played
    gp = SmallIntegerField()

    # Per-game averages
    min = DoubleField()
    pts = DoubleField()
    reb = DoubleField()
    ast = DoubleField()
    stl = DoubleField()
    blk = DoubleField()
    turnover = DoubleField()

    # Fantasy points (per game)
    ud_fp = DoubleField()
    dk_fp = DoubleField()

    # Season totals
    total_min = DoubleField()
    total_pts = DoubleField()
    total_reb = DoubleField()
    total_ast = DoubleField()
    total_stl = DoubleField()
    total_blk = DoubleField()
    total_turnover = DoubleField()
    total_fg3m = DoubleField()
    total_ud_fp = DoubleField()
    total_dk_fp = DoubleField()

    # Audit columns
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "player_season_stats"
        indexes = (
            # Unique constraint: one row per player per season (upsert target)
            (("player_id", "season"), True),
        )

    def __repr__(self) -> str:
        return (
            f"<PlayerSeasonStats("
            f"player_id={self.player_id}, "
            f"season={self.season}, "
            f"gp={self.gp}, "
            f"ud_fp={self.ud_fp})>"
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    @classmethod
    def upsert_rows(
        cls,
        rows: Iterable["PlayerSeasonRow"],
        chunk_size: int = 500,
    ) -> int:
        """
        Insert or overwrite season rows keyed by (player_id, season).

        On conflict every value column is replaced by the incoming value;
        nothing is merged with the previous row. Rows are written in
        chunks, each chunk in its own transaction.

        Args:
            rows: Season rows to write
            chunk_size: Maximum rows per INSERT statement

        Returns:
            Number of rows written
        """
        log = get_logger("db.player_season_stats")
        records = [row.to_record() for row in rows]
        value_fields = [
            getattr(cls, column)
            for column in STORED_COLUMNS
            if column not in ("player_id", "season")
        ]

        written = 0
        for chunk_number, start in enumerate(range(0, len(records), chunk_size), 1):
            chunk = records[start:start + chunk_size]
            with cls._meta.database.atomic():
                (
                    cls.insert_many(chunk)
                    .on_conflict(
                        conflict_target=[cls.player_id, cls.season],
                        preserve=value_fields,
                        update={cls.updated_at: datetime.utcnow()},
                    )
                    .execute()
                )
            written += len(chunk)
            log.info("upsert_chunk", chunk=chunk_number, rows=len(chunk))

        return written

    @classmethod
    def for_season(cls, season: int) -> list[dict]:
        """
        Get every stored row for a season, unsorted and unfiltered.

        Args:
            season: Season start year

        Returns:
            List of row dicts keyed by STORED_COLUMNS
        """
        columns = [getattr(cls, column) for column in STORED_COLUMNS]
        return list(cls.select(*columns).where(cls.season == season).dicts())


# Value columns in declaration order, without the surrogate key and audit timestamps
STORED_COLUMNS = tuple(
    name
    for name in PlayerSeasonStats._meta.sorted_field_names
    if name not in AUDIT_COLUMNS
)
