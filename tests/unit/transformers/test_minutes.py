"""Tests for the minutes parser."""
from __future__ import annotations

import pytest

from pipelines.transformers.minutes import MinutesKind, classify_minutes, parse_minutes


class TestClassifyMinutes:
    """Tests for classify_minutes()."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, MinutesKind.ABSENT),
            ("", MinutesKind.ABSENT),
            (34, MinutesKind.NUMBER),
            (34.5, MinutesKind.NUMBER),
            ("34", MinutesKind.BARE),
            ("34:30", MinutesKind.CLOCK),
            (True, MinutesKind.OTHER),
            ({"min": 3}, MinutesKind.OTHER),
        ],
    )
    def test_classifies_shapes(self, value, kind) -> None:
        """Each raw shape maps to one variant."""
        assert classify_minutes(value) is kind


class TestParseMinutes:
    """Tests for parse_minutes()."""

    def test_clock_string(self) -> None:
        """MM:SS converts seconds to a fraction of a minute."""
        assert parse_minutes("34:30") == 34.5
        assert parse_minutes("1:00") == 1.0

    def test_zero_clock_is_zero(self) -> None:
        assert parse_minutes("0:00") == 0.0

    def test_bare_numeric_text(self) -> None:
        assert parse_minutes("12") == 12.0

    def test_bare_text_uses_leading_integer(self) -> None:
        """Text without a colon keeps only its leading integer."""
        assert parse_minutes("12.7") == 12.0
        assert parse_minutes(" 8 min") == 8.0

    def test_numbers_pass_through(self) -> None:
        assert parse_minutes(34.5) == 34.5
        assert parse_minutes(20) == 20.0

    @pytest.mark.parametrize("value", [None, "", "abc", "ab:cd", "12:xx", ":30", [], True])
    def test_unparseable_is_zero(self, value) -> None:
        """Anything that does not parse yields 0, never an error."""
        assert parse_minutes(value) == 0.0

    def test_splits_on_first_colon_only(self) -> None:
        """Extra colon groups are ignored after the seconds' leading integer."""
        assert parse_minutes("10:30:15") == 10.5

    def test_seconds_over_sixty_are_not_normalized(self) -> None:
        assert parse_minutes("10:90") == 11.5
