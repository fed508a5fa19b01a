"""
Base Command Module.

Defines the abstract base class and result type for all commands in the application.

Classes:
    CommandResult: Standardized result object for command execution.
    BaseCommand: Abstract base class implementing the command pattern.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from src.services.goal_store import GoalStore


@dataclass
class CommandResult:
    """
    Standardized result object for command execution.

    Attributes:
        success (bool): True if the command executed successfully,
                        False otherwise.
        message (str): A human-readable message describing the result.
        command_name (str): The name of the command that generated
                            this result.
        data (Any): Optional payload, e.g. the goal a command created.
    """

    success: bool
    message: str = ""
    command_name: str = ""
    data: Optional[Any] = None


class BaseCommand(ABC):
    """
    Abstract base class for all user actions on the goal store.

    Commands are single-shot; there is no undo history.
    """

    def __init__(self):
        """
        Initializes the command.
        """
        self._is_executed = False

    @abstractmethod
    def execute(self, store: GoalStore) -> CommandResult:
        """
        Performs the action.

        Args:
            store (GoalStore): The goal store to operate on.

        Returns:
            CommandResult: Outcome of the action.
        """
        pass

    @property
    def is_executed(self) -> bool:
        """
        Checks if the command has been executed.

        Returns:
            bool: True if the command has been executed, False otherwise.
        """
        return self._is_executed
