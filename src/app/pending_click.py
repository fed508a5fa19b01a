"""
Pending Click Target Module.

A single-slot register for "the next click" listeners used by multi-step
flows such as "choose a goal, then choose a completion time".
"""

import logging
from typing import Callable, Optional, Union

from src.core.goals import Goal

logger = logging.getLogger(__name__)

TimestampListener = Callable[[int], bool]
GoalListener = Callable[[Goal], bool]

AWAIT_TIMESTAMP = "timestamp"
AWAIT_GOAL = "goal"


class PendingClickTarget:
    """
    Holds at most one click listener.

    A goal listener only fires when a click hits a goal. A timestamp listener
    fires on any click on the timeline. The listener returns True when it is
    done (the slot is then cleared, unless the listener registered a
    follow-up listener) or False to keep waiting for another click.
    """

    def __init__(self) -> None:
        self._kind: Optional[str] = None
        self._listener: Optional[Union[TimestampListener, GoalListener]] = None

    @property
    def waiting_for(self) -> Optional[str]:
        """AWAIT_TIMESTAMP, AWAIT_GOAL, or None when idle."""
        return self._kind

    def await_timestamp(self, listener: TimestampListener) -> None:
        """Registers a listener for the next clicked timestamp."""
        self._kind = AWAIT_TIMESTAMP
        self._listener = listener
        logger.debug("Awaiting timestamp click")

    def await_goal(self, listener: GoalListener) -> None:
        """Registers a listener for the next clicked goal."""
        self._kind = AWAIT_GOAL
        self._listener = listener
        logger.debug("Awaiting goal click")

    def clear(self) -> None:
        self._kind = None
        self._listener = None

    def dispatch(self, goal: Optional[Goal], timestamp: float) -> bool:
        """
        Delivers a click to the registered listener.

        Args:
            goal: The goal under the pointer, if any.
            timestamp: The time under the pointer in ms.

        Returns:
            bool: True if a listener received the click.
        """
        listener = self._listener
        if listener is None:
            return False

        if self._kind == AWAIT_GOAL:
            if goal is None:
                return False
            done = listener(goal)
        else:
            done = listener(int(timestamp))

        if done and self._listener is listener:
            self.clear()
        return True
