"""
Application Entry Point.

This module contains the main() function and cleanup logic for the application.
Separated from MainWindow to allow for easier testing.
"""

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from PySide6.QtWidgets import QApplication, QMessageBox  # noqa: E402

from src.app.constants import (  # noqa: E402
    STATUS_LOAD_FAIL,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from src.core.app_config import AppConfig  # noqa: E402
from src.core.errors import PersistenceError  # noqa: E402
from src.core.goals import now_ms  # noqa: E402
from src.core.logging_config import setup_logging, shutdown_logging  # noqa: E402
from src.core.paths import get_goals_file_path  # noqa: E402
from src.core.viewport import Viewport  # noqa: E402
from src.services.goal_store import GoalStore  # noqa: E402

logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point."""
    from src.app.main_window import MainWindow

    config = AppConfig.from_env()
    setup_logging(debug_mode=config.debug, log_dir=config.log_dir)

    app = QApplication(sys.argv)
    app.setOrganizationName(WINDOW_SETTINGS_KEY)
    app.setApplicationName(WINDOW_SETTINGS_APP)

    try:
        store = GoalStore(get_goals_file_path(config.data_dir, config.goals_filename))
        store.load()
    except (PersistenceError, OSError) as e:
        logger.critical(f"{STATUS_LOAD_FAIL}: {e}")
        QMessageBox.critical(None, WINDOW_TITLE, f"{STATUS_LOAD_FAIL}:\n{e}")
        cleanup_app()
        sys.exit(1)

    viewport = Viewport(
        now_ms(),
        zoom_speed=config.zoom_speed,
        animation_duration=config.zoom_animation_ms,
        min_label_spacing=config.min_label_spacing_px,
    )

    window = MainWindow(store, viewport)
    window.show()

    logger.info("Entering Event Loop...")
    exit_code = app.exec()
    cleanup_app()
    sys.exit(exit_code)


def cleanup_app() -> None:
    """Performs global cleanup operations before exit."""
    logger.info("Shutting down logging.")
    shutdown_logging()
