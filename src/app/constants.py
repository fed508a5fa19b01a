"""
Application Constants.
Stores default values for UI configuration and magic numbers.
"""

# Window Configuration
WINDOW_TITLE = "Goals Tracker"
DEFAULT_WINDOW_WIDTH = 1500
DEFAULT_WINDOW_HEIGHT = 900
WINDOW_SETTINGS_KEY = "GoalsTracker"
WINDOW_SETTINGS_APP = "GoalsTracker"
SETTINGS_GEOMETRY_KEY = "geometry"

# Timeline
TIMELINE_MIN_HEIGHT = 400
REPAINT_INTERVAL_MS = 1000 // 60

# Status Messages
STATUS_MESSAGE_TIMEOUT_MS = 3500
STATUS_LOAD_FAIL = "Failed to load the goals file"
STATUS_SAVE_FAIL = "Failed to save the goals file"

# Action Buttons (label, flow method name), laid out in two columns
ACTION_BUTTONS = [
    ("Add goal", "on_add_goal"),
    ("Add goal in the past", "on_add_goal_in_past"),
    ("Complete goal", "on_complete_goal"),
    ("Set completion point", "on_set_completion_point"),
    ("Delete", "on_delete_goal"),
    ("Cancel completion", "on_cancel_completion"),
    ("Rename", "on_rename_goal"),
    ("Change goal start", "on_change_goal_start"),
    ("Jump to now", "on_jump_to_now"),
]
