# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_api import TaskListScreen
from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage


@dataclass
class AppState:
    # Settings object (or a compatible namespace in tests).
    settings: Any

    storage: KeyValueStorage
    store: TaskStore
    screen: TaskListScreen
