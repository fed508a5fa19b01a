"""Core Goals Module.

Defines the Goal dataclass representing an open or completed interval of time.

A goal starts at ``initiated_at`` and ends at ``completed_at``. While it is
open (``completed_at is None``) its end is "now", re-evaluated on every query.
"""

import time
from dataclasses import dataclass
from typing import Optional


def now_ms() -> int:
    """
    Returns the current wall-clock time.

    Returns:
        int: Milliseconds since the Unix epoch.
    """
    return int(time.time() * 1000)


@dataclass(eq=False)
class Goal:
    """
    A named time interval, open or completed.

    Goals are distinct by identity, so two goals with the same name and
    interval are still two separate goals.

    Attributes:
        name: Display label.
        initiated_at: Start of the interval in ms since epoch.
        completed_at: End of the interval in ms since epoch, None while open.
        display_level: Lane index assigned by the layout engine.
    """

    name: str
    initiated_at: int
    completed_at: Optional[int] = None
    display_level: int = 0

    @property
    def is_completed(self) -> bool:
        """
        Checks whether the goal has an end timestamp.

        Returns:
            bool: True if the goal is completed.
        """
        return self.completed_at is not None

    def end_time(self, now: int) -> int:
        """
        Returns the end of the interval.

        Args:
            now: Current time in ms, used for open goals.

        Returns:
            int: completed_at for completed goals, otherwise now.
        """
        if self.completed_at is not None:
            return self.completed_at
        return now

    def duration(self, now: int) -> int:
        """Length of the interval in ms (open goals run until now)."""
        return self.end_time(now) - self.initiated_at
