"""
Logging Configuration Module.

Sets up the root logger once at startup: a size-rotated log file in the
configured log directory plus an optional console stream. Modules log through
``logging.getLogger(__name__)`` and need nothing from here.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import List, Optional

LOG_DIR = "logs"
LOG_FILENAME = "goals_tracker.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    Rotating file handler that tolerates a locked log file on Windows.

    A second running instance keeps the file open, which makes the rename in
    ``doRollover`` fail there. Logging then continues in the current file.
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except PermissionError:
            if sys.platform != "win32":
                raise
            # Locked by another process; rotation is retried on the next record


def _log_file_path(log_dir: Optional[str]) -> str:
    directory = log_dir or LOG_DIR
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        print(f"Failed to create log directory {directory}: {e}. Using cwd.")
        return LOG_FILENAME
    return os.path.join(directory, LOG_FILENAME)


def _build_handlers(
    log_path: str, level: int, log_to_console: bool
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    try:
        handlers.append(
            SafeRotatingFileHandler(
                log_path,
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    except OSError as e:
        print(f"CRITICAL: Could not open log file {log_path}: {e}")

    if log_to_console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def setup_logging(
    debug_mode: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[str] = None,
) -> str:
    """
    Configures the root logger for a Goals Tracker session.

    Calling it again replaces the handlers of the previous call.

    Args:
        debug_mode (bool): If True, sets level to DEBUG. Defaults to False (INFO).
        log_to_console (bool): If True, adds a StreamHandler. Defaults to True.
        log_dir (str, optional): Directory for the log file. Defaults to "logs".

    Returns:
        str: Path of the log file.
    """
    log_path = _log_file_path(log_dir)
    level = logging.DEBUG if debug_mode else logging.INFO

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)
    for handler in _build_handlers(log_path, level, log_to_console):
        root_logger.addHandler(handler)

    logging.info(
        f"Goals Tracker session started at {datetime.now().isoformat()} "
        f"(log file: {log_path}, level: {logging.getLevelName(level)})"
    )
    return log_path


def shutdown_logging() -> None:
    """Flushes and closes all handlers, releasing the log file."""
    logging.shutdown()
