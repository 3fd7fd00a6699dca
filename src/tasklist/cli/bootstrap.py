# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend and wires TaskStore / TaskListScreen into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ErrorReporter, KeyValueStorage, ValidationListener
from ..core.state import AppState
from ..storage.json_file import JsonFileStorage
from ..storage.memory import InMemoryStorage
from ..storage.sqlite import SqliteStorage
from ..tasks.task_api import TaskListScreen
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)
    settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def open_storage(settings) -> KeyValueStorage:
    backend = str(getattr(settings, "storage_backend", "json"))
    if backend == "memory":
        return InMemoryStorage()
    if backend == "sqlite":
        return SqliteStorage(settings.storage_db_path)
    if backend == "json":
        return JsonFileStorage(settings.storage_path)
    raise ValueError(f"unknown storage backend: {backend!r}")


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStorage | None = None,
    on_error: ErrorReporter | None = None,
    on_validation: ValidationListener | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    The store is returned empty: callers run `await state.store.load()`.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = open_storage(settings)

    store = TaskStore(
        storage,
        key=settings.storage_key,
        write_policy=settings.write_policy,
        on_error=on_error,
        on_validation=on_validation,
    )
    screen = TaskListScreen(store, header=settings.app_name)

    logger.info(
        "State ready backend=%s key=%s policy=%s",
        settings.storage_backend,
        settings.storage_key,
        settings.write_policy,
    )
    return AppState(settings=settings, storage=storage, store=store, screen=screen)
