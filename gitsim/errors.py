"""
Custom exceptions for the simulator.

Expected domain failures (duplicate branch, empty stash, diverged push...)
are never raised; they come back as aborted OperationResult values. These
exceptions cover programmer and data errors only.
"""

from __future__ import annotations


class GitSimError(Exception):
    """Base exception for all simulator errors."""

    pass


class StateError(GitSimError):
    """A repository state violates a structural invariant."""

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []


class PersistenceError(GitSimError):
    """Base exception for saved-state operations."""

    pass


class CorruptedStateError(PersistenceError):
    """A saved-state file is unreadable, has the wrong version or bad content."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UnknownCommandError(GitSimError):
    """An intent name does not map to any operation."""

    def __init__(self, command: str):
        super().__init__(f"Unknown command: {command}")
        self.command = command
