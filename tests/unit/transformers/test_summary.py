"""Tests for season summaries."""
from __future__ import annotations

import pytest

from pipelines.transformers.aggregation import PlayerSeasonAggregate
from pipelines.transformers.fantasy_points import (
    calculate_draftkings_points,
    calculate_underdog_points,
)
from pipelines.transformers.summary import (
    ROW_COLUMNS,
    PlayerSeasonRow,
    build_season_rows,
    summarize,
)


class TestSummarize:
    """Tests for summarize()."""

    def test_zero_games_is_dropped(self) -> None:
        assert summarize(PlayerSeasonAggregate(player_id=5), 2024) is None

    def test_two_game_season(self, two_game_records) -> None:
        """Averages, totals, team and fantasy points for a two-game player."""
        (row,) = build_season_rows(two_game_records, 2024)

        expected_ud = calculate_underdog_points(
            {"pts": 15, "reb": 10, "ast": 7.5, "stl": 1.5, "blk": 0.5, "turnover": 1.5}
        )
        assert row.player_id == 7
        assert row.season == 2024
        assert row.gp == 2
        assert row.team_abbreviation == "TMY"
        assert row.pts == 15.0
        assert row.min == pytest.approx(32.5)
        assert row.total_pts == 30
        assert row.total_min == pytest.approx(65.0)
        assert row.ud_fp == pytest.approx(expected_ud)
        assert row.ud_fp == pytest.approx(15 + 12 + 11.25 + 4.5 + 1.5 - 1.5)
        assert row.total_ud_fp == row.ud_fp * 2

    def test_draftkings_total_scores_the_average_line(self, two_game_records) -> None:
        """The DraftKings total is the average line's score times games."""
        (row,) = build_season_rows(two_game_records, 2024)

        # Average line 15 pts / 10 reb earns a double-double bonus once
        assert row.dk_fp == pytest.approx(15 + 12.5 + 11.25 + 3 + 1 - 0.75 + 1.5)
        assert row.total_dk_fp == row.dk_fp * 2

    def test_draftkings_total_is_not_the_per_game_sum(self, make_stat) -> None:
        """A bonus earned in one game is lost when the average misses it."""
        records = [
            make_stat(pts=10, reb=10, date="2024-01-01"),
            make_stat(pts=0, reb=0, date="2024-01-02"),
        ]

        (row,) = build_season_rows(records, 2024)

        per_game_sum = calculate_draftkings_points({"pts": 10, "reb": 10})
        assert per_game_sum == pytest.approx(24.0)
        assert row.dk_fp == pytest.approx(5 + 6.25)
        assert row.total_dk_fp == pytest.approx(22.5)
        # Underdog has no bonus, so its total is exact
        assert row.total_ud_fp == pytest.approx(calculate_underdog_points({"pts": 10, "reb": 10}))

    def test_missing_team_defaults(self) -> None:
        aggregate = PlayerSeasonAggregate(player_id=5, games_played=1, total_min=10)

        row = summarize(aggregate, 2024)

        assert row.team_abbreviation == "N/A"
        assert row.position == "N/A"


class TestBuildSeasonRows:
    """Tests for build_season_rows()."""

    def test_drops_players_without_games(self, season_records) -> None:
        rows = build_season_rows(season_records, 2024)

        assert [row.player_id for row in rows] == [3, 7, 12]

    def test_identical_on_rerun(self, season_records) -> None:
        assert build_season_rows(season_records, 2024) == build_season_rows(
            list(reversed(season_records)), 2024
        )

    def test_row_record_round_trip(self, season_records) -> None:
        row = build_season_rows(season_records, 2024)[0]
        record = {**row.to_record(), "id": 1, "updated_at": None}

        assert set(row.to_record()) == set(ROW_COLUMNS)
        assert PlayerSeasonRow.from_record(record) == row

    def test_player_name(self, season_records) -> None:
        row = build_season_rows(season_records, 2024)[0]

        assert row.player_name == "Luka Dončić"
