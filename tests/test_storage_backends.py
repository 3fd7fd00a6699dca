# tests/test_storage_backends.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.core.errors import StorageError
from tasklist.storage.json_file import JsonFileStorage
from tasklist.storage.memory import InMemoryStorage
from tasklist.storage.sqlite import SqliteStorage
from tasklist.tasks.task_store import TaskStore


@pytest.fixture(params=["memory", "json", "sqlite"])
def backend(request, tmp_path: Path):
    if request.param == "memory":
        return InMemoryStorage()
    if request.param == "json":
        return JsonFileStorage(tmp_path / "nested" / "storage.json")
    return SqliteStorage(tmp_path / "storage.sqlite3")


@pytest.mark.asyncio
async def test_get_missing_key_returns_none(backend) -> None:
    assert await backend.get("@tasks") is None


@pytest.mark.asyncio
async def test_set_overwrites_and_keeps_other_keys(backend) -> None:
    await backend.set("@tasks", "[1]")
    await backend.set("@other", "x")
    await backend.set("@tasks", "[2]")

    assert await backend.get("@tasks") == "[2]"
    assert await backend.get("@other") == "x"


@pytest.mark.asyncio
async def test_json_file_survives_new_instance(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    await JsonFileStorage(path).set("@tasks", "[]")

    assert await JsonFileStorage(path).get("@tasks") == "[]"
    assert not path.with_suffix(".json.tmp").exists()


@pytest.mark.asyncio
async def test_json_file_corrupt_content_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{broken", "utf-8")

    with pytest.raises(StorageError):
        await JsonFileStorage(path).get("@tasks")


@pytest.mark.asyncio
async def test_json_file_non_object_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[]", "utf-8")

    with pytest.raises(StorageError):
        await JsonFileStorage(path).set("@tasks", "[]")


@pytest.mark.asyncio
async def test_sqlite_survives_new_instance(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    await SqliteStorage(db).set("@tasks", "[]")

    assert await SqliteStorage(db).get("@tasks") == "[]"


@pytest.mark.asyncio
async def test_store_round_trip_through_file_backend(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"

    store = TaskStore(JsonFileStorage(path))
    task = store.add("Buy milk")
    assert task is not None
    store.toggle_complete(task.id)
    await store.flush()

    restarted = TaskStore(JsonFileStorage(path))
    assert await restarted.load() is True
    assert restarted.current_tasks() == store.current_tasks()


@pytest.mark.asyncio
async def test_store_corrupt_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("definitely not json", "utf-8")
    errors = []

    store = TaskStore(JsonFileStorage(path), on_error=errors.append)

    assert await store.load() is False
    assert store.current_tasks() == ()
    assert isinstance(errors[0].__cause__, StorageError)
