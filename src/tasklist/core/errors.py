# src/tasklist/core/errors.py

"""
Error types.

Storage backends raise StorageError. The task store never lets those escape:
it wraps them into LoadFailure / SaveFailure and hands them to the error hook.
"""

from __future__ import annotations


class StorageError(Exception):
    """A key-value backend could not read or write a value."""


class TaskDecodeError(ValueError):
    """A stored value is not a valid serialized task collection."""


class TaskStoreError(Exception):
    """Base class for non-fatal persistence failures reported by TaskStore."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class LoadFailure(TaskStoreError):
    """Stored collection could not be read or deserialized."""


class SaveFailure(TaskStoreError):
    """Serialized collection could not be written."""
