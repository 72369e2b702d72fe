"""Exceptions raised while building or compiling a command model."""

from typing import Sequence


class TabgenError(Exception):
    """Base class for all errors raised by tabgen."""


class InvalidArgumentError(TabgenError, ValueError):
    """Exception raised when a required input is missing or malformed, for example an
    empty set of command aliases."""


class DuplicateOptionError(TabgenError, ValueError):
    """Exception raised when two options on the same command declare the same alias."""

    def __init__(self, command_path: Sequence[str], alias: str) -> None:
        self.command_path = tuple(command_path)
        self.alias = alias
        super().__init__(
            f"Option alias {alias!r} is declared more than once on command"
            f" {' '.join(self.command_path)!r}"
        )


class InvalidCommandModelError(TabgenError, ValueError):
    """Exception raised when a command model can't be turned into a safe completion
    script, for example because a command name is empty."""
