"""
Fantasy Points Transformer

Calculates fantasy points under the Underdog and DraftKings scoring rules.
Both formulas accept a single game line or a season-average line.
"""

from typing import Mapping, TypedDict


class StatLine(TypedDict, total=False):
    """Stat categories used in fantasy point calculation. Missing keys score 0."""

    pts: float
    reb: float
    ast: float
    stl: float
    blk: float
    turnover: float
    fg3m: float


# Categories that count toward the DraftKings double-double / triple-double bonus
DOUBLE_DIGIT_CATEGORIES = ("pts", "reb", "ast", "stl", "blk")

DOUBLE_DOUBLE_BONUS = 1.5
TRIPLE_DOUBLE_BONUS = 3.0


def _stat(stats: Mapping[str, float], key: str) -> float:
    return stats.get(key) or 0


def calculate_underdog_points(stats: Mapping[str, float]) -> float:
    """
    Calculate fantasy points using Underdog scoring.

    Scoring breakdown:
        - Points: 1.0 each
        - Rebounds: 1.2 each
        - Assists: 1.5 each
        - Steals: 3.0 each
        - Blocks: 3.0 each
        - Turnovers: -1.0 each

    The formula is linear, so points(totals) == points(averages) * games.
    """
    return (
        _stat(stats, "pts") * 1.0
        + _stat(stats, "reb") * 1.2
        + _stat(stats, "ast") * 1.5
        + _stat(stats, "stl") * 3.0
        + _stat(stats, "blk") * 3.0
        + _stat(stats, "turnover") * -1.0
    )


def count_double_digit_categories(stats: Mapping[str, float]) -> int:
    """Count the bonus categories at 10 or more."""
    return sum(1 for key in DOUBLE_DIGIT_CATEGORIES if _stat(stats, key) >= 10)


def calculate_draftkings_points(stats: Mapping[str, float]) -> float:
    """
    Calculate fantasy points using DraftKings scoring.

    Scoring breakdown:
        - Points: 1.0 each
        - 3-pointers made: 0.5 each (bonus)
        - Rebounds: 1.25 each
        - Assists: 1.5 each
        - Steals: 2.0 each
        - Blocks: 2.0 each
        - Turnovers: -0.5 each
        - Double-double: +1.5, triple-double: +3.0 (not cumulative)
    """
    points = (
        _stat(stats, "pts") * 1.0
        + _stat(stats, "fg3m") * 0.5
        + _stat(stats, "reb") * 1.25
        + _stat(stats, "ast") * 1.5
        + _stat(stats, "stl") * 2.0
        + _stat(stats, "blk") * 2.0
        + _stat(stats, "turnover") * -0.5
    )

    double_digits = count_double_digit_categories(stats)
    if double_digits >= 3:
        points += TRIPLE_DOUBLE_BONUS
    elif double_digits >= 2:
        points += DOUBLE_DOUBLE_BONUS

    return points
