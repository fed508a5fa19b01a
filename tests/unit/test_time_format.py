"""
Unit tests for duration and timestamp formatting.
"""

from datetime import datetime, timezone

import pytest

from src.core.goals import Goal
from src.core.time_format import (
    describe_goal,
    format_duration,
    format_pointer_time,
    strip_title,
)

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


@pytest.mark.parametrize(
    "ms, expected",
    [
        (0, "0 seconds"),
        (1 * SECOND, "1 second"),
        (59 * SECOND + 999, "59 seconds"),
        (60 * SECOND, "1 minute"),
        (125 * SECOND, "2 minutes"),
        (HOUR, "1 hour"),
        (23 * HOUR, "23 hours"),
        (DAY, "1 day"),
        (14 * DAY, "14 days"),
        (2_629_756 * SECOND, "1 month"),
        (400 * DAY, "13 months"),
    ],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_format_duration_negative():
    with pytest.raises(ValueError):
        format_duration(-1)


def ts(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


def test_format_pointer_time_utc():
    assert format_pointer_time(ts(2024, 3, 5, 7, 8, 9), timezone.utc) == (
        "2024-03-05 07:08:09+0000"
    )


def test_format_pointer_time_local_has_offset():
    text = format_pointer_time(ts(2024, 3, 5, 7, 8, 9))

    assert text[-5] in "+-"


def test_describe_completed_goal():
    goal = Goal("Read a book", ts(2024, 3, 5), ts(2024, 3, 19))

    text = describe_goal(goal, ts(2024, 4, 1), timezone.utc)

    assert text == "Mar 05 to Mar 19 (14 days)     Read a book"


def test_describe_goal_completed_before_start():
    goal = Goal("Odd", ts(2024, 3, 19), ts(2024, 3, 5))

    text = describe_goal(goal, ts(2024, 4, 1), timezone.utc)

    assert text.endswith("     Odd")
    assert "Mar 19 to Mar 05" in text


def test_describe_open_goal():
    goal = Goal("Learn Rust", ts(2024, 3, 5, 10))

    text = describe_goal(goal, ts(2024, 3, 5, 13), timezone.utc)

    assert text == "Initiated 3 hours ago (on Mar 05)     Learn Rust"


def test_strip_title():
    now = ts(2024, 3, 5, 12)

    assert strip_title(Goal("Done", now - HOUR, now - 1), now) == "Done"
    assert strip_title(Goal("Open", now - 2 * MINUTE), now) == "Open   2 minutes"
