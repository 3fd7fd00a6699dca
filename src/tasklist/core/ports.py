# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends and UI hooks swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task, ValidationNotice
    from .errors import TaskStoreError


class KeyValueStorage(Protocol):
    """
    Async string store addressed by key.

    - get() returns None when the key was never set.
    - set() overwrites any prior value.
    Both raise StorageError when the backend fails.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class ErrorReporter(Protocol):
    """Observes LoadFailure / SaveFailure. Must not be relied on to raise."""

    def __call__(self, error: TaskStoreError) -> None: ...


class ValidationListener(Protocol):
    """Receives user-visible input validation notices (e.g. empty title)."""

    def __call__(self, notice: ValidationNotice) -> None: ...


class ChangeListener(Protocol):
    """Receives the new task snapshot whenever the collection changes."""

    def __call__(self, tasks: Sequence[Task]) -> None: ...
