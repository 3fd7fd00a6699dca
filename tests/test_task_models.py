# tests/test_task_models.py

from __future__ import annotations

import pytest

from tasklist.core.errors import TaskDecodeError
from tasklist.tasks.task_models import Task, TaskState, deserialize_tasks, serialize_tasks


def test_serialize_round_trip_keeps_order_and_fields() -> None:
    tasks = [
        Task(id=1_700_000_000_000, title="Buy milk"),
        Task(id=1_700_000_000_001, title="Call mom", completed=True),
        Task(id=1_700_000_000_002, title="Écrire « tests »"),
    ]

    assert deserialize_tasks(serialize_tasks(tasks)) == tasks


def test_serialized_form_is_compact_json_array() -> None:
    assert serialize_tasks([Task(id=1, title="a")]) == '[{"id":1,"title":"a","completed":false}]'
    assert serialize_tasks([]) == "[]"


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": 1}',
        "[1]",
        '[{"title": "a", "completed": false}]',
        '[{"id": "1", "title": "a", "completed": false}]',
        '[{"id": true, "title": "a", "completed": false}]',
        '[{"id": 1.5, "title": "a", "completed": false}]',
        '[{"id": 1, "completed": false}]',
        '[{"id": 1, "title": 7, "completed": false}]',
        '[{"id": 1, "title": "a", "completed": "yes"}]',
    ],
)
def test_structurally_incompatible_values_fail(raw: str) -> None:
    with pytest.raises(TaskDecodeError):
        deserialize_tasks(raw)


def test_integral_float_ids_and_extra_fields_are_accepted() -> None:
    tasks = deserialize_tasks('[{"id": 5.0, "title": "a", "completed": true, "color": "red"}]')

    assert tasks == [Task(id=5, title="a", completed=True)]
    assert isinstance(tasks[0].id, int)


def test_task_state_view() -> None:
    assert Task(id=1, title="a").state is TaskState.PENDING
    assert Task(id=1, title="a", completed=True).state is TaskState.COMPLETED
    assert TaskState.of(False) == "pending"
