"""Tests for relative time labels and digit counting.

Includes property-based tests via Hypothesis.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bstatus.operations.timefmt import count_digits, epoch_to_relative_str, plural

NOW = 1_700_000_000

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR

_UNITS = ("sec", "min", "hour", "day", "week", "month", "year")


class TestPlural:
    def test_one_is_singular(self) -> None:
        assert plural("sec", 1) == "1 sec"

    def test_zero_is_plural(self) -> None:
        assert plural("sec", 0) == "0 secs"

    def test_many_is_plural(self) -> None:
        assert plural("sec", 2) == "2 secs"


class TestEpochToRelativeStr:
    @pytest.mark.parametrize(
        ("ago", "expected"),
        [
            (1, "1 sec"),
            (59, "59 secs"),
            (60, "1 min"),
            (90, "1 min"),
            (59 * MINUTE + 59, "59 mins"),
            (HOUR, "1 hour"),
            (23 * HOUR, "23 hours"),
            (DAY, "1 day"),
            (6 * DAY, "6 days"),
            (7 * DAY, "1 week"),
            (29 * DAY, "4 weeks"),
            (30 * DAY, "1 month"),
            (359 * DAY, "11 months"),
            (360 * DAY, "1 year"),
            (3 * 360 * DAY, "3 years"),
        ],
    )
    def test_unit_boundaries(self, ago: int, expected: str) -> None:
        assert epoch_to_relative_str(NOW - ago, now=NOW) == expected

    def test_same_instant_is_now(self) -> None:
        assert epoch_to_relative_str(NOW, now=NOW) == "now"

    def test_future_is_now(self) -> None:
        assert epoch_to_relative_str(NOW + 500, now=NOW) == "now"

    def test_defaults_to_wall_clock(self) -> None:
        assert epoch_to_relative_str(0) != "now"

    @given(ago=st.integers(min_value=1, max_value=200 * 360 * DAY))
    @settings(max_examples=200)
    def test_property_label_shape(self, ago: int) -> None:
        """Label is "<count> <unit>" with a count of at least one."""
        count_str, unit = epoch_to_relative_str(NOW - ago, now=NOW).split(" ")
        count = int(count_str)
        assert unit.rstrip("s") in _UNITS
        assert count >= 1 or unit == "secs"
        assert unit.endswith("s") == (count != 1)

    @given(ago=st.integers(min_value=0, max_value=59))
    def test_property_seconds_below_a_minute(self, ago: int) -> None:
        label = epoch_to_relative_str(NOW - ago, now=NOW)
        if ago == 0:
            assert label == "now"
        else:
            assert label == plural("sec", ago)

    @given(ago=st.integers(min_value=HOUR, max_value=DAY - 1))
    def test_property_hours_range(self, ago: int) -> None:
        assert epoch_to_relative_str(NOW - ago, now=NOW) == plural("hour", ago // HOUR)


class TestCountDigits:
    @pytest.mark.parametrize(
        ("n", "digits"),
        [(0, 1), (1, 1), (9, 1), (10, 2), (11, 2), (99, 2), (100, 3), (101, 3), (999, 3), (1000, 4), (1001, 4)],
    )
    def test_known_values(self, n: int, digits: int) -> None:
        assert count_digits(n) == digits

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            count_digits(-1)

    @given(n=st.integers(min_value=1, max_value=10**30))
    def test_property_matches_power_of_ten(self, n: int) -> None:
        d = count_digits(n)
        assert 10 ** (d - 1) <= n < 10**d
