# src/tasklist/tasks/task_models.py

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import TaskDecodeError


class TaskState(StrEnum):
    """Two-state view of Task.completed. Either state can return to the other."""

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def of(cls, completed: bool) -> TaskState:
        return cls.COMPLETED if completed else cls.PENDING


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    completed: bool = False

    @property
    def state(self) -> TaskState:
        return TaskState.of(self.completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """Strict inverse of to_dict(). Extra keys are ignored."""
        if not isinstance(raw, dict):
            raise TaskDecodeError(f"task must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; true/false are not ids.
        if isinstance(task_id, bool):
            raise TaskDecodeError("task id must be a number")
        if isinstance(task_id, float) and task_id.is_integer():
            task_id = int(task_id)
        if not isinstance(task_id, int):
            raise TaskDecodeError(f"task id must be an integer, got {task_id!r}")

        title = raw.get("title")
        if not isinstance(title, str):
            raise TaskDecodeError(f"task {task_id} title must be a string")

        completed = raw.get("completed")
        if not isinstance(completed, bool):
            raise TaskDecodeError(f"task {task_id} completed must be a boolean")

        return cls(id=task_id, title=title, completed=completed)


@dataclass(frozen=True, slots=True)
class ValidationNotice:
    """User-visible rejection of input (the only error the user ever sees)."""

    title: str
    message: str


EMPTY_TITLE_NOTICE = ValidationNotice(title="Error", message="Please enter a task")


def serialize_tasks(tasks: Iterable[Task]) -> str:
    """Encode the whole collection as a compact JSON array."""
    return json.dumps(
        [task.to_dict() for task in tasks],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def deserialize_tasks(raw: str) -> list[Task]:
    """Decode a value produced by serialize_tasks(). Raises TaskDecodeError."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise TaskDecodeError(f"stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"stored tasks must be a JSON array, got {type(data).__name__}")

    return [Task.from_dict(item) for item in data]
