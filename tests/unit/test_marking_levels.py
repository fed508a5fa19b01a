"""
Unit tests for the MarkingScheme tick generators.

All tests run in UTC so that alignment does not depend on the machine's
timezone.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.marking_levels import (
    DAY_MS,
    HOUR_MS,
    MINUTE_MS,
    WEEK_MS,
    Marking,
    MarkingLevel,
    MarkingScheme,
)


def ms(*args):
    """UTC datetime components to ms since epoch."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def scheme():
    return MarkingScheme(timezone.utc)


class TestLevels:
    """Tests for the level ladder itself."""

    def test_ten_levels_finest_first(self, scheme):
        assert len(scheme.levels) == 10
        assert scheme.levels[0] == MarkingLevel.SECONDS
        assert scheme.coarsest == MarkingLevel.DECADES

    def test_periodicity_increases(self, scheme):
        periods = [scheme.average_periodicity(level) for level in scheme.levels]
        assert periods == sorted(periods)
        assert len(set(periods)) == len(periods)

    def test_periodicity_values(self, scheme):
        assert scheme.average_periodicity(MarkingLevel.SECONDS) == 1000
        assert scheme.average_periodicity(MarkingLevel.MONTHS) == 2_629_756_800
        assert scheme.average_periodicity(MarkingLevel.DECADES) == 315_569_563_200


class TestFixedSteps:
    """Tests for the sub-day levels."""

    def test_seconds(self, scheme):
        start = ms(2024, 3, 1, 12, 0, 0) + 250
        markings = scheme.list_markings(MarkingLevel.SECONDS, start, start + 2_000)

        assert [m.timestamp - start for m in markings] == [-250, 750, 1750]
        assert markings[0].label == "12:00:00"

    def test_quarter_hours(self, scheme):
        start = ms(2024, 3, 1, 12, 7)
        markings = scheme.list_markings(
            MarkingLevel.QUARTER_HOURS, start, start + HOUR_MS
        )

        assert [m.label for m in markings] == [
            "12:00",
            "12:15",
            "12:30",
            "12:45",
            "13:00",
        ]

    def test_six_hours_aligned_to_midnight(self, scheme):
        start = ms(2024, 3, 1, 1)
        markings = scheme.list_markings(MarkingLevel.SIX_HOURS, start, start + DAY_MS)

        assert markings[0].timestamp == ms(2024, 3, 1, 0)
        assert markings[1].label == "Fri 06:00"
        assert len(markings) == 5

    def test_six_hours_follow_zone_offset(self):
        tz = timezone(timedelta(hours=2))
        scheme = MarkingScheme(tz)
        start = int(datetime(2024, 3, 1, 1, tzinfo=tz).timestamp() * 1000)

        markings = scheme.list_markings(MarkingLevel.SIX_HOURS, start, start + DAY_MS)

        first = datetime.fromtimestamp(markings[0].timestamp / 1000, tz)
        assert (first.hour, first.minute) == (0, 0)

    def test_days(self, scheme):
        start = ms(2024, 2, 28, 15)
        markings = scheme.list_markings(MarkingLevel.DAYS, start, start + 2 * DAY_MS)

        assert [m.label for m in markings] == ["Feb 28", "Feb 29", "Mar 01"]

    def test_single_point_range(self, scheme):
        t = ms(2024, 1, 1, 0, 0, 0)

        assert scheme.list_markings(MarkingLevel.MINUTES, t, t) == [
            Marking(t, "00:00")
        ]

    def test_reversed_range_is_empty(self, scheme):
        assert scheme.list_markings(MarkingLevel.HOURS, 10 * HOUR_MS, 0) == []

    def test_float_bounds(self, scheme):
        markings = scheme.list_markings(MarkingLevel.MINUTES, 0.5, MINUTE_MS + 0.9)

        assert [m.timestamp for m in markings] == [0, MINUTE_MS]

    def test_truncated_listing(self, scheme):
        markings = scheme.list_markings(MarkingLevel.SECONDS, 0, 100 * DAY_MS)

        assert len(markings) == MarkingScheme.MAX_MARKINGS


class TestCalendarSteps:
    """Tests for weeks, months, years and decades."""

    def test_weeks_start_on_monday(self, scheme):
        # 2024-03-06 is a Wednesday
        start = ms(2024, 3, 6, 10)
        markings = scheme.list_markings(MarkingLevel.WEEKS, start, start + 3 * WEEK_MS)

        assert markings[0].timestamp == ms(2024, 3, 4)
        assert [m.label for m in markings] == [
            "Mar 04",
            "Mar 11",
            "Mar 18",
            "Mar 25",
        ]

    def test_months_follow_calendar(self, scheme):
        markings = scheme.list_markings(
            MarkingLevel.MONTHS, ms(2023, 11, 15), ms(2024, 3, 1)
        )

        assert [m.timestamp for m in markings] == [
            ms(2023, 11, 1),
            ms(2023, 12, 1),
            ms(2024, 1, 1),
            ms(2024, 2, 1),
            ms(2024, 3, 1),
        ]
        assert [m.label for m in markings] == ["Nov", "Dec", "Jan", "Feb", "Mar"]

    def test_years(self, scheme):
        markings = scheme.list_markings(
            MarkingLevel.YEARS, ms(2019, 6, 1), ms(2022, 6, 1)
        )

        assert [m.label for m in markings] == ["2019", "2020", "2021", "2022"]
        assert markings[1].timestamp == ms(2020, 1, 1)

    def test_decades(self, scheme):
        markings = scheme.list_markings(
            MarkingLevel.DECADES, ms(1995, 1, 1), ms(2031, 1, 1)
        )

        assert [m.label for m in markings] == ["1990", "2000", "2010", "2020", "2030"]

    def test_every_level_is_ascending(self, scheme):
        start = ms(2020, 5, 17, 8, 30)
        for level in scheme.levels:
            period = scheme.average_periodicity(level)
            markings = scheme.list_markings(level, start, start + 5 * period)
            timestamps = [m.timestamp for m in markings]

            assert timestamps == sorted(set(timestamps)), level
            assert timestamps[0] <= start, level
            assert timestamps[-1] <= start + 5 * period, level
