"""
Error Types Module.

Defines the exception hierarchy shared by the goal store, the persistence
codec and the command layer.

Persistence errors are fatal for the load/save that raised them. Validation
errors describe a rejected user action and never leave partial state behind.
"""


class GoalsTrackerError(Exception):
    """Base class for all application errors."""


class PersistenceError(GoalsTrackerError):
    """Raised when the goals file cannot be decoded."""


class VersionMismatchError(PersistenceError):
    """
    Raised when the goals file was written with another format version.

    Attributes:
        expected: The format version this build reads and writes.
        found: The version tag stored in the file.
    """

    def __init__(self, expected: int, found: int):
        super().__init__(
            f"Incompatible goals file (running version {expected}, found {found})"
        )
        self.expected = expected
        self.found = found


class CorruptDataError(PersistenceError):
    """Raised when the goals file is truncated or malformed."""


class GoalValidationError(GoalsTrackerError):
    """Base class for rejected goal mutations."""


class InvalidStateError(GoalValidationError):
    """Raised when a goal is (or is not) completed contrary to the action."""


class InvalidTimeError(GoalValidationError):
    """Raised when a timestamp breaks temporal ordering or lies in the future."""


class NotFoundError(GoalsTrackerError, LookupError):
    """Raised when operating on a goal that is not in the store."""
