# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore

from .fakes import FakeStorage, RecordingNotices, RecordingReporter


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap code.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Todo List",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "storage.json",
        storage_db_path=tmp_path / "data" / "storage.sqlite3",
        storage_backend="memory",
        storage_key="@tasks",
        write_policy="serial",
    )


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def notices() -> RecordingNotices:
    return RecordingNotices()


@pytest.fixture()
def store(storage: FakeStorage, reporter: RecordingReporter, notices: RecordingNotices) -> TaskStore:
    return TaskStore(storage, key="@tasks", on_error=reporter, on_validation=notices)


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    storage: FakeStorage,
    reporter: RecordingReporter,
    notices: RecordingNotices,
) -> AppState:
    """AppState wired with the fake storage and recording hooks."""
    return create_initial_state(
        settings=settings,
        storage=storage,
        on_error=reporter,
        on_validation=notices,
    )
