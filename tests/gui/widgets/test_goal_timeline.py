"""
Tests for GoalTimelineWidget: strip geometry, hit testing and input handling.
"""

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QEvent, QPoint, QPointF, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent

from src.app.pending_click import PendingClickTarget
from src.core.goals import Goal
from src.core.marking_levels import DAY_MS, HOUR_MS
from src.core.viewport import Viewport
from src.gui.widgets.goal_timeline import GoalTimelineWidget
from src.services.goal_store import GoalStore

WIDTH = 1000
HEIGHT = 400


@pytest.fixture
def timeline_store(clock):
    """
    A completed goal from -6h to -2h (level 0) and an open goal from -3h
    (level 1, it overlaps the first one).
    """
    store = GoalStore(clock=clock)
    store.add(Goal("Read a book", clock.now - 6 * HOUR_MS, clock.now - 2 * HOUR_MS))
    store.add(Goal("Learn Rust", clock.now - 3 * HOUR_MS))
    return store


@pytest.fixture
def timeline(qapp, qtbot, timeline_store, clock):
    viewport = Viewport(clock.now)
    widget = GoalTimelineWidget(timeline_store, viewport, PendingClickTarget(), clock)
    qtbot.addWidget(widget)
    widget.resize(WIDTH, HEIGHT)
    widget.show()
    qtbot.waitExposed(widget)
    return widget


def move_to(widget, x, y):
    event = QMouseEvent(
        QEvent.MouseMove,
        QPointF(x, y),
        QPointF(x, y),
        Qt.NoButton,
        Qt.NoButton,
        Qt.NoModifier,
    )
    widget.mouseMoveEvent(event)


def test_resize_updates_viewport_width(timeline):
    assert timeline.viewport.width == WIDTH
    assert timeline.timeline_y == HEIGHT - 50


def test_goal_rect_geometry(timeline, clock):
    completed, running = timeline.store.all()

    rect = timeline.goal_rect(completed, clock.now)

    # Range is now-12h .. now+12h over 1000px
    assert rect.left() == pytest.approx(250)
    assert rect.right() == pytest.approx(1000 * 10 / 24)
    assert rect.top() == HEIGHT - 50 - 20 - 30
    assert rect.height() == GoalTimelineWidget.GOAL_STRIP_THICKNESS

    running_rect = timeline.goal_rect(running, clock.now)
    assert running_rect.top() == rect.top() - 25
    assert running_rect.right() == pytest.approx(500)


def test_goal_outside_range_has_no_rect(timeline, clock):
    old = Goal("Old", clock.now - 5 * DAY_MS, clock.now - 4 * DAY_MS)

    assert timeline.goal_rect(old, clock.now) is None


def test_goal_at(timeline, clock):
    completed, running = timeline.store.all()

    assert timeline.goal_at(300, 310, clock.now) is completed
    assert timeline.goal_at(450, 285, clock.now) is running
    assert timeline.goal_at(600, 310, clock.now) is None
    assert timeline.goal_at(300, 200, clock.now) is None


def test_hover_tracks_goal_and_pointer(timeline, clock):
    completed = timeline.store.all()[0]
    hovered = MagicMock()
    timeline.goal_hovered.connect(hovered)

    move_to(timeline, 300, 310)

    assert timeline.hovered_goal is completed
    hovered.assert_called_once_with(completed)
    assert timeline.viewport.pointer_time == pytest.approx(
        clock.now - 12 * HOUR_MS + 0.3 * DAY_MS
    )

    move_to(timeline, 300, 100)
    assert timeline.hovered_goal is None


def test_click_is_dispatched_to_goal_listener(timeline, qtbot):
    completed = timeline.store.all()[0]
    listener = MagicMock(return_value=True)
    timeline.clicks.await_goal(listener)

    qtbot.mouseClick(timeline, Qt.LeftButton, pos=QPoint(300, 310))

    listener.assert_called_once_with(completed)
    assert timeline.clicks.waiting_for is None


def test_click_is_dispatched_to_timestamp_listener(timeline, qtbot, clock):
    listener = MagicMock(return_value=True)
    timeline.clicks.await_timestamp(listener)

    qtbot.mouseClick(timeline, Qt.LeftButton, pos=QPoint(500, 100))

    (timestamp,) = listener.call_args[0]
    assert abs(timestamp - clock.now) <= DAY_MS / WIDTH


def test_wheel_zooms_out_around_pointer(timeline, clock):
    anchor_time = timeline.viewport.map_pixel_to_time(200, clock.now)
    event = QWheelEvent(
        QPointF(200, 100),
        QPointF(200, 100),
        QPoint(0, 0),
        QPoint(0, -120),
        Qt.NoButton,
        Qt.NoModifier,
        Qt.NoScrollPhase,
        False,
    )

    timeline.wheelEvent(event)

    viewport = timeline.viewport
    assert viewport.target_range.length > DAY_MS
    done = clock.now + Viewport.ZOOM_ANIMATION_DURATION
    assert viewport.map_pixel_to_time(200, done) == pytest.approx(anchor_time)


def test_paint_with_hover(timeline):
    move_to(timeline, 300, 310)

    image = timeline.grab()

    assert not image.isNull()
