"""
CLI Utilities Module.

Common utility functions for CLI tools.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from src.core.goals import Goal

logger = logging.getLogger(__name__)


def validate_goals_path(goals_path: str, allow_create: bool = False) -> bool:
    """
    Validate that a goals file exists.

    Args:
        goals_path: Path to the goals file.
        allow_create: If True, allows a non-existent file (for add operations).

    Returns:
        True if valid, False otherwise.
    """
    path = Path(goals_path)

    if path.is_dir():
        logger.error(f"Goals path is a directory: {goals_path}")
        return False

    if not path.exists():
        if allow_create:
            logger.debug(f"Goals file will be created: {goals_path}")
            return True
        logger.error(f"Goals file not found: {goals_path}")
        return False

    return True


def parse_timestamp(value: str) -> int:
    """
    Parse a CLI time argument.

    Accepts milliseconds since epoch or an ISO 8601 date/time. ISO values
    without an offset are read as local time.

    Args:
        value: The raw argument.

    Returns:
        int: Milliseconds since epoch.

    Raises:
        ValueError: If the value is neither.
    """
    value = value.strip()
    if value.lstrip("-").isdigit():
        return int(value)
    return int(datetime.fromisoformat(value).timestamp() * 1000)


def pick_goal(goals: Sequence[Goal], index: int) -> Optional[Goal]:
    """
    Select a goal by its position in start order.

    Args:
        goals: Goals as listed by ``list``.
        index: Zero-based position.

    Returns:
        The goal, or None if the index is out of range.
    """
    if 0 <= index < len(goals):
        return goals[index]
    logger.error(f"No goal at index {index} (have {len(goals)})")
    return None
