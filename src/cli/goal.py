#!/usr/bin/env python3
"""
Goal Management CLI.

Provides command-line tools for listing and editing the goals file.
Goals are addressed by their index in the ``list`` output (start order).

Usage:
    python -m src.cli.goal list --file goals.bin
    python -m src.cli.goal add --file goals.bin --name "Learn Rust"
    python -m src.cli.goal add --file goals.bin --name "Run" --at 2024-01-05T08:00
    python -m src.cli.goal complete --file goals.bin --index 0
    python -m src.cli.goal cancel --file goals.bin --index 0
    python -m src.cli.goal rename --file goals.bin --index 0 --name "New Name"
    python -m src.cli.goal set-start --file goals.bin --index 0 --at 1704441600000
    python -m src.cli.goal delete --file goals.bin --index 0

Without --file the goals file of the desktop app is used, resolved from the
GOALS_TRACKER_DATA_DIR and GOALS_TRACKER_GOALS_FILENAME settings.
"""

import argparse
import json
import logging
import sys
from typing import Callable

from dotenv import load_dotenv

from src.cli.utils import parse_timestamp, pick_goal, validate_goals_path
from src.commands.base_command import BaseCommand
from src.commands.goal_commands import (
    AddGoalCommand,
    CancelCompletionCommand,
    CompleteGoalCommand,
    RemoveGoalCommand,
    RenameGoalCommand,
    SetInitiatedCommand,
)
from src.core.app_config import AppConfig
from src.core.errors import PersistenceError
from src.core.goals import Goal
from src.core.paths import get_goals_file_path
from src.core.time_format import describe_goal
from src.services.goal_store import GoalStore

# Setup logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def _open_store(args) -> GoalStore:
    store = GoalStore(args.file)
    store.load()
    return store


def _edit(args, build: Callable[[Goal], BaseCommand]) -> int:
    """
    Loads the store, runs the command built for the selected goal and saves.

    Args:
        args: Parsed arguments carrying ``file`` and ``index``.
        build: Creates the command for the selected goal.

    Returns:
        int: Exit code.
    """
    try:
        store = _open_store(args)
        goal = pick_goal(store.all(), args.index)
        if goal is None:
            return 1

        result = build(goal).execute(store)
        if not result.success:
            print(f"✗ Error: {result.message}")
            return 1

        store.save()
        print(f"✓ {result.message}")
        return 0

    except (PersistenceError, OSError, ValueError) as e:
        logger.error(f"Failed to update goals: {e}")
        if args.verbose:
            raise
        return 1


def list_goals(args) -> int:
    """List all goals."""
    try:
        store = _open_store(args)
        goals = store.all()
        now = store.clock()

        if args.json:
            output = [
                {
                    "index": index,
                    "name": goal.name,
                    "initiated_at": goal.initiated_at,
                    "completed_at": goal.completed_at,
                    "display_level": goal.display_level,
                }
                for index, goal in enumerate(goals)
            ]
            print(json.dumps(output, indent=2))
        else:
            if not goals:
                print("No goals found.")
                return 0

            print(f"\nFound {len(goals)} goal(s):\n")
            for index, goal in enumerate(goals):
                status = "done" if goal.is_completed else "open"
                print(f"[{index}] ({status}, level {goal.display_level})")
                print(f"    {describe_goal(goal, now)}")
                print()

        return 0

    except (PersistenceError, OSError) as e:
        logger.error(f"Failed to list goals: {e}")
        if args.verbose:
            raise
        return 1


def add_goal(args) -> int:
    """Add a new goal."""
    try:
        store = _open_store(args)
        initiated_at = parse_timestamp(args.at) if args.at else None

        result = AddGoalCommand(args.name, initiated_at).execute(store)
        if not result.success:
            print(f"✗ Error: {result.message}")
            return 1

        store.save()
        print(f"✓ {result.message}")
        print(f"  Initiated: {result.data.initiated_at}")
        return 0

    except (PersistenceError, OSError, ValueError) as e:
        logger.error(f"Failed to add goal: {e}")
        if args.verbose:
            raise
        return 1


def complete_goal(args) -> int:
    """Complete a goal now or at --at."""
    at = parse_timestamp(args.at) if args.at else None
    return _edit(args, lambda goal: CompleteGoalCommand(goal, at))


def cancel_completion(args) -> int:
    """Re-open a completed goal."""
    return _edit(args, CancelCompletionCommand)


def rename_goal(args) -> int:
    """Rename a goal."""
    return _edit(args, lambda goal: RenameGoalCommand(goal, args.name))


def set_start(args) -> int:
    """Move the start of a goal."""
    at = parse_timestamp(args.at)
    return _edit(args, lambda goal: SetInitiatedCommand(goal, at))


def delete_goal(args) -> int:
    """Delete a goal."""
    return _edit(args, RemoveGoalCommand)


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        description="Manage the goals file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_file_argument(sub):
        sub.add_argument(
            "--file",
            "-f",
            default=None,
            help="Path to the goals file (default: user data directory)",
        )

    def add_index_argument(sub):
        sub.add_argument(
            "--index", "-i", type=int, required=True, help="Goal index from 'list'"
        )

    # List command
    list_parser = subparsers.add_parser("list", help="List all goals")
    add_file_argument(list_parser)
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(func=list_goals)

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new goal")
    add_file_argument(add_parser)
    add_parser.add_argument("--name", "-n", required=True, help="Goal name")
    add_parser.add_argument(
        "--at", help="Start time (ms since epoch or ISO date), default now"
    )
    add_parser.set_defaults(func=add_goal)

    # Complete command
    complete_parser = subparsers.add_parser("complete", help="Complete a goal")
    add_file_argument(complete_parser)
    add_index_argument(complete_parser)
    complete_parser.add_argument(
        "--at", help="Completion time (ms since epoch or ISO date), default now"
    )
    complete_parser.set_defaults(func=complete_goal)

    # Cancel command
    cancel_parser = subparsers.add_parser("cancel", help="Cancel a completion")
    add_file_argument(cancel_parser)
    add_index_argument(cancel_parser)
    cancel_parser.set_defaults(func=cancel_completion)

    # Rename command
    rename_parser = subparsers.add_parser("rename", help="Rename a goal")
    add_file_argument(rename_parser)
    add_index_argument(rename_parser)
    rename_parser.add_argument("--name", "-n", required=True, help="New name")
    rename_parser.set_defaults(func=rename_goal)

    # Set-start command
    start_parser = subparsers.add_parser("set-start", help="Move a goal's start")
    add_file_argument(start_parser)
    add_index_argument(start_parser)
    start_parser.add_argument(
        "--at", required=True, help="New start (ms since epoch or ISO date)"
    )
    start_parser.set_defaults(func=set_start)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a goal")
    add_file_argument(delete_parser)
    add_index_argument(delete_parser)
    delete_parser.set_defaults(func=delete_goal)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    if args.file is None:
        load_dotenv()
        config = AppConfig.from_env()
        args.file = get_goals_file_path(config.data_dir, config.goals_filename)

    # Only add may create the file
    if not validate_goals_path(args.file, allow_create=args.command == "add"):
        sys.exit(1)

    try:
        sys.exit(args.func(args))
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
