"""Exception types for Tasknest.

None of these are fatal. Validation errors reach the caller; storage errors
are caught by the stores and logged.
"""

from __future__ import annotations


class TasknestError(Exception):
    """Base class for all Tasknest errors."""


class ValidationError(TasknestError):
    """User input was rejected (empty task title or category name)."""


class StorageReadError(TasknestError):
    """A persisted value could not be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Could not read {key!r}: {reason}")
        self.key = key
        self.reason = reason


class StorageWriteError(TasknestError):
    """A value could not be written to the durable store."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Could not write {key!r}: {reason}")
        self.key = key
        self.reason = reason
