"""
Main Window Module.

The top-level window of the goals tracker: the goal timeline on top and the
action buttons below it. Button handlers start the flows of
GoalFlowController; the goals are saved when the window closes.
"""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import (
    QGridLayout,
    QInputDialog,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.app.constants import (
    ACTION_BUTTONS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    SETTINGS_GEOMETRY_KEY,
    STATUS_MESSAGE_TIMEOUT_MS,
    STATUS_SAVE_FAIL,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from src.app.goal_flows import GoalFlowController
from src.app.pending_click import PendingClickTarget
from src.app.ui_constants import Margins, Spacing
from src.core.goals import now_ms
from src.core.viewport import Viewport
from src.gui.widgets.goal_timeline import GoalTimelineWidget
from src.services.goal_store import GoalStore

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window.
    """

    def __init__(
        self,
        store: GoalStore,
        viewport: Viewport,
        clock: Callable[[], int] = now_ms,
        parent=None,
    ):
        """
        Initializes the MainWindow.

        Args:
            store: The loaded goal store.
            viewport: Viewport of the timeline.
            clock: Returns the current time in ms.
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)
        self.store = store
        self._clock = clock
        self.clicks = PendingClickTarget()
        self.flows = GoalFlowController(store, self.clicks, self.notify)

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(
            Margins.COMPACT, Margins.COMPACT, Margins.COMPACT, Margins.COMPACT
        )
        layout.setSpacing(Spacing.STANDARD)

        self.timeline = GoalTimelineWidget(
            store, viewport, self.clicks, clock=clock, parent=central
        )
        layout.addWidget(self.timeline, stretch=1)

        button_grid = QGridLayout()
        button_grid.setSpacing(Spacing.COMPACT)
        self.buttons = {}
        for index, (label, handler_name) in enumerate(ACTION_BUTTONS):
            button = QPushButton(label, central)
            button.clicked.connect(getattr(self, handler_name))
            button_grid.addWidget(button, index // 2, index % 2)
            self.buttons[handler_name] = button
        layout.addLayout(button_grid)

        self.setCentralWidget(central)
        self._restore_window_state()

    def _restore_window_state(self):
        """Restores window geometry from settings."""
        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        geometry = settings.value(SETTINGS_GEOMETRY_KEY)
        if geometry:
            self.restoreGeometry(geometry)

    def notify(self, message: str) -> None:
        """Shows a transient message in the status bar."""
        logger.debug(f"Notify: {message}")
        self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def ask_goal_name(self, current: str = "") -> Optional[str]:
        """
        Opens the goal name dialog.

        Returns:
            Optional[str]: The entered name, or None if the dialog was cancelled.
        """
        name, ok = QInputDialog.getText(
            self, WINDOW_TITLE, "Goal name:", QLineEdit.Normal, current
        )
        return name if ok else None

    # --- Button handlers ---

    def on_add_goal(self):
        self.flows.add_goal(self.ask_goal_name())

    def on_add_goal_in_past(self):
        self.flows.add_goal_in_past(self.ask_goal_name())

    def on_complete_goal(self):
        self.flows.complete_goal()

    def on_set_completion_point(self):
        self.flows.set_completion_point()

    def on_delete_goal(self):
        self.flows.delete_goal()

    def on_cancel_completion(self):
        self.flows.cancel_completion()

    def on_rename_goal(self):
        self.flows.rename_goal(self.ask_goal_name)

    def on_change_goal_start(self):
        self.flows.change_goal_start()

    def on_jump_to_now(self):
        """Scrolls the timeline so that the current time is centered."""
        now = self._clock()
        self.timeline.viewport.center_on(now, now)
        self.timeline.update()

    def closeEvent(self, event):
        """
        Handles application close event.

        Saves the goals and window geometry. If the goals cannot be written,
        the user is told and the window stays open.
        """
        try:
            self.store.save()
        except OSError as e:
            logger.critical(f"{STATUS_SAVE_FAIL}: {e}")
            QMessageBox.critical(self, WINDOW_TITLE, f"{STATUS_SAVE_FAIL}:\n{e}")
            event.ignore()
            return

        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        settings.setValue(SETTINGS_GEOMETRY_KEY, self.saveGeometry())
        event.accept()
