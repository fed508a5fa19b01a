"""
Time Formatting Module.

Human-readable durations and timestamps for hover text and the pointer
readout on the timeline.
"""

from datetime import datetime, tzinfo
from typing import Optional

from src.core.goals import Goal

POINTER_FORMAT = "%Y-%m-%d %H:%M:%S%z"
DETAILS_FORMAT = "%b %d"

_MONTH_SECONDS = 2_629_756


def format_duration(ms: int) -> str:
    """
    Formats a duration using its largest whole unit.

    Args:
        ms: Duration in milliseconds.

    Returns:
        str: e.g. "1 minute", "3 hours", "14 days", "2 months".

    Raises:
        ValueError: If ``ms`` is negative.
    """
    if ms < 0:
        raise ValueError(f"Negative duration: {ms}")

    s = int(ms) // 1000
    if s < 60:
        value, unit = s, "seconds"
    elif s < 3600:
        value, unit = s // 60, "minutes"
    elif s < 86400:
        value, unit = s // 3600, "hours"
    elif s < _MONTH_SECONDS:
        value, unit = s // 86400, "days"
    else:
        value, unit = s // _MONTH_SECONDS, "months"

    if value == 1:
        unit = unit[:-1]
    return f"{value} {unit}"


def _format(timestamp: float, fmt: str, tz: Optional[tzinfo]) -> str:
    moment = datetime.fromtimestamp(timestamp / 1000, tz)
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.strftime(fmt)


def format_pointer_time(timestamp: float, tz: Optional[tzinfo] = None) -> str:
    """Full date-time readout for the pointer position."""
    return _format(timestamp, POINTER_FORMAT, tz)


def describe_goal(goal: Goal, now: int, tz: Optional[tzinfo] = None) -> str:
    """
    Builds the hover description of a goal.

    Args:
        goal: The hovered goal.
        now: Current time in ms.
        tz: Timezone for dates, None for local time.

    Returns:
        str: Interval and duration followed by the goal name.
    """
    if goal.completed_at is not None:
        details = (
            f"{_format(goal.initiated_at, DETAILS_FORMAT, tz)} to "
            f"{_format(goal.completed_at, DETAILS_FORMAT, tz)} "
            f"({format_duration(max(0, goal.completed_at - goal.initiated_at))})"
        )
    else:
        elapsed = max(0, now - goal.initiated_at)
        details = (
            f"Initiated {format_duration(elapsed)} ago "
            f"(on {_format(goal.initiated_at, DETAILS_FORMAT, tz)})"
        )
    return f"{details}     {goal.name}"


def strip_title(goal: Goal, now: int) -> str:
    """Text drawn inside a goal strip; open goals show their running time."""
    if goal.is_completed:
        return goal.name
    return f"{goal.name}   {format_duration(max(0, now - goal.initiated_at))}"
