# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from tasklist.core.errors import StorageError, TaskStoreError
from tasklist.tasks.task_models import ValidationNotice


class FakeStorage:
    """
    Deterministic KeyValueStorage for unit tests.

    - Captures every successful write for assertions
    - fail_get / fail_set inject backend failures
    - gate (when set) holds writes until the test releases it
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_get = False
        self.fail_set = False
        self.gate: asyncio.Event | None = None
        self.started = 0

    async def get(self, key: str) -> str | None:
        if self.fail_get:
            raise StorageError("disk unreadable")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.started += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_set:
            raise StorageError("disk full")
        self.data[key] = value
        self.writes.append((key, value))


@dataclass(slots=True)
class RecordingReporter:
    """Error hook that remembers what it was given."""

    errors: list[TaskStoreError] = field(default_factory=list)

    def __call__(self, error: TaskStoreError) -> None:
        self.errors.append(error)


@dataclass(slots=True)
class RecordingNotices:
    """Validation channel that remembers what it was given."""

    notices: list[ValidationNotice] = field(default_factory=list)

    def __call__(self, notice: ValidationNotice) -> None:
        self.notices.append(notice)


class SteppingClock:
    """time.time() stand-in; returns the same instant unless advanced."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now
