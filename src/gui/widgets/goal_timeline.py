"""
Goal Timeline Widget Module.

Provides the GoalTimelineWidget, which draws the time axis and the goal
strips and feeds pointer input to the Viewport.

Goal strips are stacked upwards from the axis by display level. Repaints are
driven by a ~60 Hz timer so that zoom animations and open goals (which end
"now") stay current.
"""

import logging
from datetime import tzinfo
from typing import Callable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from src.app.constants import REPAINT_INTERVAL_MS, TIMELINE_MIN_HEIGHT
from src.app.pending_click import PendingClickTarget
from src.app.ui_constants import Palette
from src.core.goals import Goal, now_ms
from src.core.time_format import describe_goal, format_pointer_time, strip_title
from src.core.viewport import Viewport
from src.services.goal_store import GoalStore

logger = logging.getLogger(__name__)


class GoalTimelineWidget(QWidget):
    """
    Interactive goal timeline.

    Handles:
    - Rendering the axis, its markings and the goal strips.
    - Wheel zoom around the pointer and drag panning.
    - Hover details and click dispatch to the pending click target.
    """

    goal_hovered = Signal(object)  # Goal or None

    GOAL_STRIP_THICKNESS = 20
    GOAL_STRIPS_GAP = 5
    AXIS_BOTTOM_MARGIN = 50
    STRIP_AXIS_GAP = 30
    OFFSCREEN_MARGIN = 10
    LABEL_FONT_SIZE = 14
    GOAL_FONT_SIZE = 12

    def __init__(
        self,
        store: GoalStore,
        viewport: Viewport,
        clicks: PendingClickTarget,
        clock: Callable[[], int] = now_ms,
        tz: Optional[tzinfo] = None,
        parent=None,
    ):
        """
        Initializes the GoalTimelineWidget.

        Args:
            store: Source of the goals to draw.
            viewport: Visible range and coordinate mapping.
            clicks: Pending click register of the editing flows.
            clock: Returns the current time in ms.
            tz: Timezone for text readouts, None for local time.
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)
        self.store = store
        self.viewport = viewport
        self.clicks = clicks
        self._clock = clock
        self._tz = tz

        self.hovered_goal: Optional[Goal] = None
        self._drag_x: Optional[float] = None

        self.setMouseTracking(True)
        self.setMinimumHeight(TIMELINE_MIN_HEIGHT)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self._repaint_timer = QTimer(self)
        self._repaint_timer.timeout.connect(self.update)
        self._repaint_timer.start(REPAINT_INTERVAL_MS)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def timeline_y(self) -> int:
        """Vertical position of the axis line."""
        return self.height() - self.AXIS_BOTTOM_MARGIN

    def is_goal_visible(self, goal: Goal, now: int) -> bool:
        """
        Checks whether any part of a goal is inside the displayed range.

        Args:
            goal: The goal to check.
            now: Current time in ms.

        Returns:
            bool: False if it starts after the range or ends before it.
        """
        current = self.viewport.sample(now)
        if goal.initiated_at > current.end:
            return False
        return goal.end_time(now) >= current.start

    def goal_rect(self, goal: Goal, now: int) -> Optional[QRectF]:
        """
        Computes the strip rectangle of a goal.

        Args:
            goal: The goal.
            now: Current time in ms.

        Returns:
            QRectF or None if the goal is outside the displayed range.
        """
        if not self.is_goal_visible(goal, now):
            return None

        start_x = self.viewport.map_time_to_pixel(goal.initiated_at, now)
        end_x = self.viewport.map_time_to_pixel(goal.end_time(now), now)
        start_x = max(start_x, -self.OFFSCREEN_MARGIN)
        end_x = min(end_x, self.width() + self.OFFSCREEN_MARGIN)

        top = (
            self.timeline_y
            - self.GOAL_STRIP_THICKNESS
            - self.STRIP_AXIS_GAP
            - goal.display_level * (self.GOAL_STRIP_THICKNESS + self.GOAL_STRIPS_GAP)
        )
        return QRectF(start_x, top, end_x - start_x, self.GOAL_STRIP_THICKNESS)

    def goal_at(self, x: float, y: float, now: int) -> Optional[Goal]:
        """
        Hit-tests the goal strips.

        Args:
            x: Widget x coordinate.
            y: Widget y coordinate.
            now: Current time in ms.

        Returns:
            Goal or None.
        """
        point = QPointF(x, y)
        for goal in self.store.all():
            rect = self.goal_rect(goal, now)
            if rect is not None and rect.contains(point):
                return goal
        return None

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def resizeEvent(self, event):
        """Keeps the viewport width in sync with the widget."""
        super().resizeEvent(event)
        self.viewport.set_width(self.width())

    def wheelEvent(self, event):
        """
        Zooms around the pointer.

        Wheel rotation towards the user zooms out, away from the user zooms in.
        """
        notches = -event.angleDelta().y() / 120.0
        if notches == 0:
            return
        x = event.position().x()
        self.viewport.on_scroll(x, notches, self._clock())
        self.update()

    def mouseMoveEvent(self, event):
        """Tracks the pointer, hovered goal and drag panning."""
        pos = event.position()
        now = self._clock()

        if self._drag_x is not None and event.buttons() & Qt.LeftButton:
            self.viewport.pan(pos.x() - self._drag_x, now)
            self._drag_x = pos.x()

        self.viewport.on_pointer_move(pos.x(), now)
        hovered = self.goal_at(pos.x(), pos.y(), now)
        if hovered is not self.hovered_goal:
            self.hovered_goal = hovered
            self.goal_hovered.emit(hovered)
        self.update()

    def mousePressEvent(self, event):
        """
        Delivers the click to a waiting flow, otherwise starts a pan drag.
        """
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return

        pos = event.position()
        now = self._clock()
        goal = self.goal_at(pos.x(), pos.y(), now)
        timestamp = self.viewport.map_pixel_to_time(pos.x(), now)

        if self.clicks.dispatch(goal, timestamp):
            logger.debug(f"Click at {timestamp:.0f} delivered to pending flow")
        else:
            self._drag_x = pos.x()
        self.update()

    def mouseReleaseEvent(self, event):
        self._drag_x = None
        super().mouseReleaseEvent(event)

    def paintEvent(self, event):
        """Paints the whole timeline."""
        now = self._clock()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        try:
            painter.fillRect(self.rect(), QColor(*Palette.BACKGROUND))
            self._paint_axis(painter, now)
            self._paint_pointers(painter, now)
            self._paint_goals(painter, now)
            self._paint_readouts(painter, now)
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def _paint_axis(self, painter: QPainter, now: int) -> None:
        y = self.timeline_y
        painter.setPen(QColor(*Palette.AXIS))
        painter.drawLine(0, y, self.width(), y)

        font = painter.font()
        font.setPointSize(self.LABEL_FONT_SIZE)
        painter.setFont(font)

        for marking in self.viewport.list_markings(now):
            x = round(self.viewport.map_time_to_pixel(marking.timestamp, now))
            painter.drawLine(x, y - 10, x, y)
            painter.drawText(x + 5, y - 5, marking.label)

        for marking in self.viewport.list_minor_markings(now):
            x = round(self.viewport.map_time_to_pixel(marking.timestamp, now))
            painter.drawLine(x, y + 5, x, y)

    def _paint_pointers(self, painter: QPainter, now: int) -> None:
        y = self.timeline_y
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(*Palette.AXIS))
        for timestamp, offset in ((now, 5), (self.viewport.pointer_time, 15)):
            x = self.viewport.map_time_to_pixel(timestamp, now)
            painter.drawPolygon(
                QPolygonF(
                    [
                        QPointF(x, y + offset),
                        QPointF(x - 5, y + offset + 10),
                        QPointF(x + 5, y + offset + 10),
                    ]
                )
            )

    def _paint_goals(self, painter: QPainter, now: int) -> None:
        font = painter.font()
        font.setPointSize(self.GOAL_FONT_SIZE)
        painter.setFont(font)
        metrics = painter.fontMetrics()

        for goal in self.store.all():
            rect = self.goal_rect(goal, now)
            if rect is None:
                continue

            color = QColor(
                *(Palette.GOAL_HOVERED if goal is self.hovered_goal else Palette.GOAL)
            )
            if goal.is_completed:
                color = color.darker()
            painter.setPen(Qt.NoPen)
            painter.setBrush(color)
            painter.drawRoundedRect(rect, 5, 5)

            title = strip_title(goal, now)
            if metrics.horizontalAdvance(title) < rect.width() - 10:
                painter.setPen(QColor(*Palette.GOAL_TEXT))
                painter.drawText(rect, Qt.AlignCenter, title)

    def _paint_readouts(self, painter: QPainter, now: int) -> None:
        y = self.timeline_y + 40
        painter.setPen(QColor(*Palette.POINTER_TEXT))
        painter.drawText(10, y, format_pointer_time(self.viewport.pointer_time, self._tz))

        if self.hovered_goal is not None:
            info = describe_goal(self.hovered_goal, now, self._tz)
            painter.setPen(QColor(*Palette.HOVER_TEXT))
            width = painter.fontMetrics().horizontalAdvance(info)
            painter.drawText(self.width() - width - 20, y, info)
