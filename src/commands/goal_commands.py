"""
Goal Commands Module.

Commands for every goal mutation. A rejected action (validation error or a
goal that is no longer in the store) becomes a failed CommandResult carrying
a user-facing message; the store is left untouched in that case.
"""

import logging
from typing import Callable, Optional

from src.commands.base_command import BaseCommand, CommandResult
from src.core.errors import GoalValidationError, NotFoundError
from src.core.goals import Goal
from src.services.goal_store import GoalStore

logger = logging.getLogger(__name__)


class _GoalCommand(BaseCommand):
    """Runs a store operation and converts rejections into results."""

    def _run(
        self, action: Callable[[], object], success_message: str
    ) -> CommandResult:
        name = self.__class__.__name__
        try:
            data = action()
        except (GoalValidationError, NotFoundError) as e:
            logger.warning(f"{name} rejected: {e}")
            return CommandResult(success=False, message=str(e), command_name=name)

        self._is_executed = True
        return CommandResult(
            success=True, message=success_message, command_name=name, data=data
        )


class AddGoalCommand(_GoalCommand):
    """
    Command to add a new goal.
    """

    def __init__(self, name: str, initiated_at: Optional[int] = None):
        """
        Args:
            name: Goal name.
            initiated_at: Start time in ms. Defaults to the store's "now".
        """
        super().__init__()
        self.name = name
        self.initiated_at = initiated_at

    def execute(self, store: GoalStore) -> CommandResult:
        start = self.initiated_at if self.initiated_at is not None else store.clock()
        logger.info(f"Executing AddGoal: {self.name}")
        return self._run(
            lambda: store.add(Goal(self.name, int(start))),
            f"Added goal '{self.name}'",
        )


class RemoveGoalCommand(_GoalCommand):
    """
    Command to delete a goal.
    """

    def __init__(self, goal: Goal):
        super().__init__()
        self.goal = goal

    def execute(self, store: GoalStore) -> CommandResult:
        logger.info(f"Executing RemoveGoal: {self.goal.name}")
        return self._run(
            lambda: store.remove(self.goal), f"Deleted goal '{self.goal.name}'"
        )


class CompleteGoalCommand(_GoalCommand):
    """
    Command to complete a goal now or at a past moment.
    """

    def __init__(self, goal: Goal, at: Optional[int] = None):
        super().__init__()
        self.goal = goal
        self.at = at

    def execute(self, store: GoalStore) -> CommandResult:
        logger.info(f"Executing CompleteGoal: {self.goal.name}")
        return self._run(
            lambda: store.complete(self.goal, self.at),
            f"Completed goal '{self.goal.name}'",
        )


class CancelCompletionCommand(_GoalCommand):
    """
    Command to re-open a completed goal.
    """

    def __init__(self, goal: Goal):
        super().__init__()
        self.goal = goal

    def execute(self, store: GoalStore) -> CommandResult:
        logger.info(f"Executing CancelCompletion: {self.goal.name}")
        return self._run(
            lambda: store.cancel_completion(self.goal),
            f"Cancelled completion of '{self.goal.name}'",
        )


class SetInitiatedCommand(_GoalCommand):
    """
    Command to move the start of a goal.
    """

    def __init__(self, goal: Goal, at: int):
        super().__init__()
        self.goal = goal
        self.at = at

    def execute(self, store: GoalStore) -> CommandResult:
        logger.info(f"Executing SetInitiated: {self.goal.name} -> {self.at}")
        return self._run(
            lambda: store.set_initiated(self.goal, self.at),
            f"Moved start of '{self.goal.name}'",
        )


class RenameGoalCommand(_GoalCommand):
    """
    Command to rename a goal.
    """

    def __init__(self, goal: Goal, name: str):
        super().__init__()
        self.goal = goal
        self.name = name

    def execute(self, store: GoalStore) -> CommandResult:
        logger.info(f"Executing RenameGoal: {self.goal.name} -> {self.name}")
        return self._run(
            lambda: store.rename(self.goal, self.name),
            f"Renamed goal to '{self.name}'",
        )
