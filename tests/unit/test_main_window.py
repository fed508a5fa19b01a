"""
Unit tests for the MainWindow.
"""

from unittest.mock import patch

import pytest

from src.app.constants import (
    ACTION_BUTTONS,
    SETTINGS_GEOMETRY_KEY,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from src.app.main_window import MainWindow
from src.app.pending_click import AWAIT_GOAL
from src.core.marking_levels import DAY_MS, HOUR_MS
from src.core.viewport import Viewport
from src.services.goal_store import GoalStore


@pytest.fixture
def file_store(tmp_path, clock):
    return GoalStore(tmp_path / "goals.bin", clock=clock)


@pytest.fixture
def main_window(qapp, qtbot, file_store, clock):
    """Fixture to create a MainWindow instance."""
    window = MainWindow(file_store, Viewport(clock.now), clock=clock)
    qtbot.addWidget(window)
    yield window


def test_window_setup(main_window):
    assert main_window.windowTitle() == WINDOW_TITLE
    assert set(main_window.buttons) == {name for _, name in ACTION_BUTTONS}
    assert main_window.timeline.store is main_window.store


def test_add_goal_button(main_window, clock):
    with patch.object(main_window, "ask_goal_name", return_value="Swim"):
        main_window.buttons["on_add_goal"].click()

    (goal,) = main_window.store.all()
    assert goal.name == "Swim"
    assert goal.initiated_at == clock.now


def test_flow_button_prompts_in_status_bar(main_window):
    main_window.buttons["on_delete_goal"].click()

    assert main_window.clicks.waiting_for == AWAIT_GOAL
    assert main_window.statusBar().currentMessage() == "Click the goal to delete"


def test_close_saves_goals_and_geometry(main_window, file_store, mock_qsettings):
    with patch.object(main_window, "ask_goal_name", return_value="Swim"):
        main_window.on_add_goal()

    assert main_window.close() is True

    reloaded = GoalStore(file_store.path, clock=file_store.clock)
    reloaded.load()
    assert [g.name for g in reloaded.all()] == ["Swim"]
    settings = mock_qsettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
    assert settings.contains(SETTINGS_GEOMETRY_KEY)


def test_close_blocked_when_save_fails(main_window):
    with (
        patch.object(main_window.store, "save", side_effect=OSError("disk full")),
        patch("src.app.main_window.QMessageBox.critical") as critical,
    ):
        assert main_window.close() is False

    critical.assert_called_once()
    assert "disk full" in critical.call_args[0][2]


def test_jump_to_now_button(main_window, clock):
    viewport = main_window.timeline.viewport
    viewport.set_range(clock.now - 30 * DAY_MS, clock.now - 29 * DAY_MS, clock.now)
    clock.advance(HOUR_MS)

    main_window.buttons["on_jump_to_now"].click()

    target = viewport.target_range
    assert (target.start + target.end) / 2 == pytest.approx(clock.now)
    assert target.length == pytest.approx(DAY_MS)
