"""
Unit tests for goal commands.
"""

from unittest.mock import MagicMock

from src.commands.goal_commands import (
    AddGoalCommand,
    CancelCompletionCommand,
    CompleteGoalCommand,
    RemoveGoalCommand,
    RenameGoalCommand,
    SetInitiatedCommand,
)
from src.core.errors import InvalidTimeError
from src.core.goals import Goal


def test_add_goal_defaults_to_now(store, clock):
    cmd = AddGoalCommand("Learn Rust")

    result = cmd.execute(store)

    assert result.success is True
    assert result.command_name == "AddGoalCommand"
    assert result.data.initiated_at == clock.now
    assert store.all() == (result.data,)
    assert cmd.is_executed is True


def test_add_goal_in_past(store, clock):
    result = AddGoalCommand("Run", clock.now - 5_000).execute(store)

    assert result.success is True
    assert result.data.initiated_at == clock.now - 5_000


def test_add_goal_in_future_fails(store, clock):
    cmd = AddGoalCommand("Later", clock.now + 5_000)

    result = cmd.execute(store)

    assert result.success is False
    assert "future" in result.message
    assert len(store) == 0
    assert cmd.is_executed is False


def test_complete_goal(populated_store, clock):
    goal = populated_store.all()[1]

    result = CompleteGoalCommand(goal).execute(populated_store)

    assert result.success is True
    assert goal.completed_at == clock.now


def test_complete_goal_already_completed(populated_store):
    goal = populated_store.all()[0]

    result = CompleteGoalCommand(goal).execute(populated_store)

    assert result.success is False
    assert result.message == "Already completed"


def test_complete_goal_before_start(populated_store):
    goal = populated_store.all()[1]

    result = CompleteGoalCommand(goal, goal.initiated_at - 1).execute(populated_store)

    assert result.success is False
    assert goal.completed_at is None


def test_cancel_completion(populated_store):
    goal = populated_store.all()[0]

    result = CancelCompletionCommand(goal).execute(populated_store)

    assert result.success is True
    assert goal.completed_at is None


def test_cancel_completion_of_open_goal(populated_store):
    goal = populated_store.all()[1]

    result = CancelCompletionCommand(goal).execute(populated_store)

    assert result.success is False
    assert result.message == "Not completed to be cancelled"


def test_remove_goal(populated_store):
    goal = populated_store.all()[0]

    result = RemoveGoalCommand(goal).execute(populated_store)

    assert result.success is True
    assert goal not in populated_store


def test_remove_goal_twice(populated_store):
    goal = populated_store.all()[0]
    RemoveGoalCommand(goal).execute(populated_store)

    result = RemoveGoalCommand(goal).execute(populated_store)

    assert result.success is False


def test_set_initiated(populated_store, clock):
    goal = populated_store.all()[1]

    result = SetInitiatedCommand(goal, clock.now - 50_000).execute(populated_store)

    assert result.success is True
    assert populated_store.all()[0] is goal


def test_set_initiated_after_end(populated_store, clock):
    goal = populated_store.all()[0]

    result = SetInitiatedCommand(goal, clock.now - 1_000).execute(populated_store)

    assert result.success is False
    assert result.message == "Cannot start after the end"


def test_rename_goal(populated_store):
    goal = populated_store.all()[0]

    result = RenameGoalCommand(goal, "Read two books").execute(populated_store)

    assert result.success is True
    assert goal.name == "Read two books"


def test_rejection_is_converted_to_result():
    """Store validation errors become failed results."""
    mock_store = MagicMock()
    mock_store.rename.side_effect = InvalidTimeError("nope")

    result = RenameGoalCommand(Goal("x", 0), "y").execute(mock_store)

    assert result.success is False
    assert result.message == "nope"
