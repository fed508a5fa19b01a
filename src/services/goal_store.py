"""
Goal Store Module.

Owns the authoritative goal list. Every structural mutation goes through the
store, which validates it, applies it completely or not at all, and then
re-runs the layout engine over the whole list.

The store is constructed explicitly at startup, loaded once from the goals
file and saved on shutdown.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from src.core.errors import InvalidStateError, InvalidTimeError, NotFoundError
from src.core.goal_layout import GoalLayoutEngine, overlapping_before
from src.core.goals import Goal, now_ms
from src.services.goal_codec import GoalCodec

logger = logging.getLogger(__name__)


class GoalStore:
    """
    Sorted collection of goals with validated mutation operations.

    Goals are matched by identity. Consumers get read-only tuples from
    :meth:`all` and route every change back through the store.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        codec: Optional[GoalCodec] = None,
        clock: Callable[[], int] = now_ms,
        layout: Optional[GoalLayoutEngine] = None,
    ):
        """
        Args:
            path: Location of the goals file. None keeps the store in memory
                (load starts empty, save does nothing).
            codec: Binary codec, defaults to the current format version.
            clock: Returns the current time in ms.
            layout: Layout engine used after every mutation.
        """
        self.path = Path(path) if path is not None else None
        self.codec = codec or GoalCodec()
        self.clock = clock
        self.layout = layout or GoalLayoutEngine()
        self._goals: List[Goal] = []

        logger.info(f"GoalStore initialized with path: {self.path}")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """
        Replaces the current goals with the contents of the goals file.

        A missing file means there are no goals yet.

        Raises:
            VersionMismatchError: If the file has another format version.
            CorruptDataError: If the file is malformed. Nothing is loaded.
            IsADirectoryError: If a directory occupies the file path.
            OSError: If the file cannot be read.
        """
        if self.path is None or not self.path.exists():
            logger.info("No goals file found, starting with an empty list")
            self._goals = []
            return

        if self.path.is_dir():
            raise IsADirectoryError(f"{self.path} is occupied by a directory")

        data = self.path.read_bytes()
        goals = self.codec.decode(data)
        self._goals = goals
        self._recompute()
        logger.info(f"Loaded {len(goals)} goals from {self.path}")

    def save(self) -> None:
        """
        Writes all goals to the goals file.

        Writes to a temporary file first and atomically replaces the target.

        Raises:
            OSError: If the file cannot be written.
        """
        if self.path is None:
            logger.debug("In-memory store, skipping save")
            return

        data = self.codec.encode(self._goals)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.parent / f".{self.path.name}.tmp"
        try:
            temp_path.write_bytes(data)
            temp_path.replace(self.path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise
        logger.info(f"Saved {len(self._goals)} goals to {self.path}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all(self) -> Tuple[Goal, ...]:
        """
        Returns the goals in start order.

        Returns:
            Tuple[Goal, ...]: Read-only snapshot of the list.
        """
        return tuple(self._goals)

    def __len__(self) -> int:
        return len(self._goals)

    def __contains__(self, goal: object) -> bool:
        return any(g is goal for g in self._goals)

    def overlapping_before(self, goal: Goal) -> List[Goal]:
        """
        Lists earlier goals whose interval overlaps the start of ``goal``.

        Args:
            goal: A goal in the store.

        Returns:
            List[Goal]: Overlapping predecessors in start order.

        Raises:
            NotFoundError: If the goal is not in the store.
        """
        return overlapping_before(self._goals, goal)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _recompute(self) -> None:
        self.layout.recompute_placement(self._goals)

    def _require_member(self, goal: Goal) -> None:
        if goal not in self:
            raise NotFoundError(f"Goal {goal.name!r} is not in the store")

    def add(self, goal: Goal) -> Goal:
        """
        Adds a goal. Overlapping goals are allowed.

        Args:
            goal: The goal to add.

        Returns:
            Goal: The added goal.

        Raises:
            InvalidStateError: If this goal object is already in the store.
            InvalidTimeError: If it starts in the future, or its completion
                precedes its start or lies in the future.
        """
        if goal in self:
            raise InvalidStateError(f"Goal {goal.name!r} is already in the store")

        now = self.clock()
        if goal.initiated_at > now:
            raise InvalidTimeError("Cannot start in the point in the future")
        if goal.completed_at is not None:
            if goal.completed_at < goal.initiated_at:
                raise InvalidTimeError("Cannot complete before the initiation")
            if goal.completed_at > now:
                raise InvalidTimeError("Cannot complete in the point in the future")

        self._goals.append(goal)
        self._recompute()
        logger.info(f"Added goal {goal.name!r} (initiated {goal.initiated_at})")
        return goal

    def remove(self, goal: Goal) -> None:
        """
        Removes a goal by identity.

        Raises:
            NotFoundError: If the goal is not in the store.
        """
        for index, candidate in enumerate(self._goals):
            if candidate is goal:
                del self._goals[index]
                self._recompute()
                logger.info(f"Removed goal {goal.name!r}")
                return
        raise NotFoundError(f"Goal {goal.name!r} is not in the store")

    def complete(self, goal: Goal, at: Optional[int] = None) -> None:
        """
        Marks a goal as completed.

        Args:
            goal: A goal in the store.
            at: Completion time in ms. Defaults to now.

        Raises:
            NotFoundError: If the goal is not in the store.
            InvalidStateError: If the goal is already completed.
            InvalidTimeError: If ``at`` is before the start or in the future.
        """
        self._require_member(goal)
        if goal.is_completed:
            raise InvalidStateError("Already completed")

        now = self.clock()
        if at is None:
            at = now
        if at < goal.initiated_at:
            raise InvalidTimeError(
                f"Cannot complete before the initiation "
                f"(init {goal.initiated_at}, complete {at})"
            )
        if at > now:
            raise InvalidTimeError(f"Cannot complete in the point in the future ({at})")

        goal.completed_at = int(at)
        self._recompute()
        logger.info(f"Completed goal {goal.name!r} at {at}")

    def cancel_completion(self, goal: Goal) -> None:
        """
        Re-opens a completed goal.

        Raises:
            NotFoundError: If the goal is not in the store.
            InvalidStateError: If the goal is not completed.
        """
        self._require_member(goal)
        if not goal.is_completed:
            raise InvalidStateError("Not completed to be cancelled")

        goal.completed_at = None
        self._recompute()
        logger.info(f"Cancelled completion of goal {goal.name!r}")

    def set_initiated(self, goal: Goal, at: int) -> None:
        """
        Moves the start of a goal.

        Args:
            goal: A goal in the store.
            at: New start time in ms.

        Raises:
            NotFoundError: If the goal is not in the store.
            InvalidTimeError: If ``at`` is in the future, or after the
                completion of a completed goal.
        """
        self._require_member(goal)
        if goal.completed_at is not None and at > goal.completed_at:
            raise InvalidTimeError("Cannot start after the end")
        if at > self.clock():
            raise InvalidTimeError("Cannot start in the point in the future")

        goal.initiated_at = int(at)
        self._recompute()
        logger.info(f"Moved start of goal {goal.name!r} to {at}")

    def rename(self, goal: Goal, name: str) -> None:
        """
        Renames a goal.

        Raises:
            NotFoundError: If the goal is not in the store.
        """
        self._require_member(goal)
        logger.info(f"Renamed goal {goal.name!r} to {name!r}")
        goal.name = name
