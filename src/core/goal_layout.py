"""
Goal Layout Module.

Provides the lane assignment algorithm that stacks overlapping goals on the
timeline using a greedy "lowest free level" approach.

The result depends on the processing order (goals sorted by start time) and
is not a minimum colouring of the interval graph. It only guarantees that two
overlapping goals never share a display level.
"""

import logging
from typing import List, Sequence

from src.core.errors import NotFoundError
from src.core.goals import Goal

logger = logging.getLogger(__name__)


def goals_overlap(earlier: Goal, later: Goal) -> bool:
    """
    Checks whether an earlier goal is still running when a later one starts.

    An open goal ends "now", which is never before a later start, so an open
    earlier goal always overlaps.

    Args:
        earlier: Goal that comes first in start order.
        later: Goal that comes after it.

    Returns:
        bool: True if the intervals overlap.
    """
    if earlier.completed_at is None:
        return True
    return earlier.completed_at > later.initiated_at


def _index_of(goals: Sequence[Goal], goal: Goal) -> int:
    for index, candidate in enumerate(goals):
        if candidate is goal:
            return index
    raise NotFoundError(f"Unlisted goal: {goal.name!r}")


def overlapping_before(goals: Sequence[Goal], goal: Goal) -> List[Goal]:
    """
    Lists the goals positioned before ``goal`` that overlap its start.

    Args:
        goals: Goals in start order.
        goal: A member of ``goals`` (matched by identity).

    Returns:
        List[Goal]: Overlapping predecessors, in list order.

    Raises:
        NotFoundError: If ``goal`` is not in ``goals``.
    """
    index = _index_of(goals, goal)
    return [other for other in goals[:index] if goals_overlap(other, goal)]


class GoalLayoutEngine:
    """
    Assigns display levels to goals.

    Always recomputes the whole list; goal counts are small enough that an
    incremental update is not worth the bookkeeping.
    """

    def recompute_placement(self, goals: List[Goal]) -> None:
        """
        Sorts goals by start time and assigns every goal a display level.

        Args:
            goals: The goal list. Sorted in place, levels mutated in place.
        """
        goals.sort(key=lambda g: g.initiated_at)

        for index, goal in enumerate(goals):
            before = [
                other for other in goals[:index] if goals_overlap(other, goal)
            ]
            goal.display_level = self._find_level(before)

        logger.debug(
            f"Placed {len(goals)} goals on "
            f"{max((g.display_level for g in goals), default=-1) + 1} levels"
        )

    @staticmethod
    def _find_level(before: List[Goal]) -> int:
        """
        Picks the lowest level not taken by an overlapping predecessor.

        Args:
            before: Overlapping predecessors of the goal being placed.

        Returns:
            int: The level to assign.
        """
        if not before:
            return 0

        before.sort(key=lambda g: g.display_level)

        last = len(before) - 1
        if before[last].display_level == last:
            # Every level below len(before) is occupied; open a new one.
            return last + 1

        for i, occupant in enumerate(before):
            if occupant.display_level != i:
                return i

        return last + 1
