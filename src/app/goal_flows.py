"""
Goal Flows Module.

Implements the interactive editing flows behind the main window buttons.
Each flow prompts the user through ``notify``, waits for clicks via the
PendingClickTarget, and applies the change with a goal command.
"""

import logging
from typing import Callable, Optional

from src.app.pending_click import PendingClickTarget
from src.commands.base_command import BaseCommand, CommandResult
from src.commands.goal_commands import (
    AddGoalCommand,
    CancelCompletionCommand,
    CompleteGoalCommand,
    RemoveGoalCommand,
    RenameGoalCommand,
    SetInitiatedCommand,
)
from src.core.goals import Goal
from src.services.goal_store import GoalStore

logger = logging.getLogger(__name__)

NameProvider = Callable[[], Optional[str]]


class GoalFlowController:
    """
    Runs the multi-step goal editing flows.

    Starting a flow replaces whatever flow was waiting for a click.
    """

    def __init__(
        self,
        store: GoalStore,
        clicks: PendingClickTarget,
        notify: Callable[[str], None],
    ):
        """
        Args:
            store: The goal store to edit.
            clicks: Pending click register shared with the timeline widget.
            notify: Shows a short message to the user.
        """
        self.store = store
        self.clicks = clicks
        self.notify = notify

    def _execute(self, command: BaseCommand) -> bool:
        result: CommandResult = command.execute(self.store)
        if not result.success:
            self.notify(result.message)
        return result.success

    def cancel(self) -> None:
        """Abandons the flow that is waiting for a click."""
        if self.clicks.waiting_for is not None:
            logger.debug("Flow cancelled")
        self.clicks.clear()

    def add_goal(self, name: Optional[str]) -> bool:
        """
        Adds a goal starting now.

        Args:
            name: Name from the input dialog; None when the dialog was cancelled.

        Returns:
            bool: True if the goal was added.
        """
        if name is None:
            return False
        self.clicks.clear()
        return self._execute(AddGoalCommand(name))

    def add_goal_in_past(self, name: Optional[str]) -> None:
        """Adds a goal whose start is picked by clicking the timeline."""
        if name is None:
            return

        def on_time(at: int) -> bool:
            return self._execute(AddGoalCommand(name, at))

        self.clicks.await_timestamp(on_time)
        self.notify("Click on when the goal was set")

    def complete_goal(self) -> None:
        """Completes the clicked goal now."""

        def on_goal(goal: Goal) -> bool:
            return self._execute(CompleteGoalCommand(goal))

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal that is completed")

    def set_completion_point(self) -> None:
        """Completes the clicked goal at a clicked moment in the past."""

        def on_goal(goal: Goal) -> bool:
            if goal.is_completed:
                self.notify("This goal is already completed")
                return False

            def on_time(at: int) -> bool:
                return self._execute(CompleteGoalCommand(goal, at))

            self.clicks.await_timestamp(on_time)
            self.notify("Click on when the goal was completed")
            return True

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal that was completed in the past")

    def delete_goal(self) -> None:
        """Deletes the clicked goal."""

        def on_goal(goal: Goal) -> bool:
            return self._execute(RemoveGoalCommand(goal))

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal to delete")

    def cancel_completion(self) -> None:
        """Re-opens the clicked goal."""

        def on_goal(goal: Goal) -> bool:
            return self._execute(CancelCompletionCommand(goal))

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal to cancel its completion")

    def rename_goal(self, ask_name: NameProvider) -> None:
        """
        Renames the clicked goal.

        Args:
            ask_name: Opens the name dialog; returns None when cancelled.
        """

        def on_goal(goal: Goal) -> bool:
            name = ask_name()
            if name is not None:
                self._execute(RenameGoalCommand(goal, name))
            return True

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal to rename")

    def change_goal_start(self) -> None:
        """Moves the start of the clicked goal to a clicked moment."""

        def on_goal(goal: Goal) -> bool:
            def on_time(at: int) -> bool:
                return self._execute(SetInitiatedCommand(goal, at))

            self.clicks.await_timestamp(on_time)
            self.notify("Click on when the goal started")
            return True

        self.clicks.await_goal(on_goal)
        self.notify("Click the goal to change its starting point")
