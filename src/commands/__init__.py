"""
Commands Package.

This package contains the command classes that apply user actions to the
goal store. Commands validate through the store and report rejected actions
as a CommandResult message instead of raising.
"""
