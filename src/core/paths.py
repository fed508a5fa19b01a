"""
Path Utility Module.
Resolves the user data directory holding the goals file.
"""

import os
import sys
from pathlib import Path
from typing import Optional

APP_NAME = "GoalsTracker"
GOALS_FILENAME = "goals.bin"


def get_user_data_dir() -> Path:
    """
    Returns the platform-specific application data directory.

    Does not create the directory.

    Returns:
        Path: e.g. ``%APPDATA%/GoalsTracker`` or ``~/.local/share/GoalsTracker``.
    """
    if sys.platform == "win32":
        base_dir = Path(
            os.environ.get("APPDATA", os.path.expanduser("~\\AppData\\Roaming"))
        )
    elif sys.platform == "darwin":
        base_dir = Path(os.path.expanduser("~/Library/Application Support"))
    else:
        base_dir = Path(os.path.expanduser("~/.local/share"))

    return base_dir / APP_NAME


def get_user_data_path(filename: str = "", data_dir: Optional[Path] = None) -> str:
    """
    Returns the absolute path to a file in the user's application data directory.
    Creates the directory if it doesn't exist.

    Args:
        filename: Optional filename to append to the directory path.
        data_dir: Override for the data directory.

    Returns:
        str: Absolute path to the user data directory or file.

    Raises:
        NotADirectoryError: If a regular file occupies the directory path.
    """
    directory = Path(data_dir) if data_dir else get_user_data_dir()
    if directory.is_file():
        raise NotADirectoryError(f"There's a file occupying {directory}")
    directory.mkdir(parents=True, exist_ok=True)

    if filename:
        return str(directory / filename)
    return str(directory)


def get_goals_file_path(
    data_dir: Optional[Path] = None, filename: str = GOALS_FILENAME
) -> str:
    """
    Returns the path of the persisted goals file.

    Args:
        data_dir: Override for the data directory.
        filename: Override for the file name.

    Returns:
        str: Absolute path to the goals file.
    """
    return get_user_data_path(filename, data_dir)
