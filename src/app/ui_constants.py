"""
UI Constants Module.

Provides standardized spacing and margin constants for consistent layout
following the 8-point grid system.
"""


class Spacing:
    """Standard spacing values (8-point grid)."""

    COMPACT = 4  # Half unit
    STANDARD = 8  # Base unit


class Margins:
    """Standard margin values (8-point grid)."""

    COMPACT = 8  # Base unit


class Palette:
    """Timeline colors."""

    BACKGROUND = (21, 21, 21)
    AXIS = (192, 192, 192)
    POINTER_TEXT = (64, 64, 64)
    HOVER_TEXT = (128, 128, 128)
    GOAL = (192, 192, 192)
    GOAL_HOVERED = (205, 205, 205)
    GOAL_TEXT = (0, 0, 0)
