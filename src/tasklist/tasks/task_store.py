# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from ..core.errors import LoadFailure, TaskStoreError
from ..core.ports import ChangeListener, ErrorReporter, KeyValueStorage, ValidationListener
from .task_models import EMPTY_TITLE_NOTICE, Task, ValidationNotice, deserialize_tasks, serialize_tasks
from .task_writer import SERIAL, TaskWriter

logger = logging.getLogger(__name__)


def log_store_error(error: TaskStoreError) -> None:
    """Default error hook: a warning with the underlying cause attached."""
    cause = error.__cause__
    logger.warning("%s", error, exc_info=(type(cause), cause, cause.__traceback__) if cause else None)


def log_validation_notice(notice: ValidationNotice) -> None:
    logger.info("Validation: %s: %s", notice.title, notice.message)


class TimestampIdGenerator:
    """
    Task ids derived from the creation time in milliseconds.

    Two tasks created in the same millisecond (or after the clock stepped back)
    get last_id + 1 instead, so ids stay unique and increasing.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, ids: Iterable[int]) -> None:
        for task_id in ids:
            if task_id > self._last:
                self._last = task_id

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate


class TaskStore:
    """
    In-memory ordered task collection backed by a key-value storage.

    - load() replaces the collection with the stored one (best-effort).
    - add / toggle_complete / delete mutate memory synchronously and hand a
      full serialized snapshot to the TaskWriter, which persists it in the
      background.
    - Storage problems never propagate: they are reported to on_error.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = "@tasks",
        write_policy: str = SERIAL,
        on_error: ErrorReporter | None = None,
        on_validation: ValidationListener | None = None,
        id_generator: TimestampIdGenerator | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._on_error = on_error or log_store_error
        self._on_validation = on_validation or log_validation_notice
        self._ids = id_generator or TimestampIdGenerator()
        self._listeners: list[ChangeListener] = []

        self._tasks: list[Task] = []
        self._writer = TaskWriter(storage, key, on_failure=self._report, policy=write_policy)

        logger.info("TaskStore ready key=%s policy=%s", key, write_policy)

    @property
    def key(self) -> str:
        return self._key

    @property
    def writer(self) -> TaskWriter:
        return self._writer

    # ---- reading ----

    def current_tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self._tasks if task.completed)

    @property
    def pending_count(self) -> int:
        return len(self._tasks) - self.completed_count

    # ---- lifecycle ----

    async def load(self) -> bool:
        """
        Replace the collection with the stored one.

        Absent (or empty) stored value: collection left as is.
        Tasks added before the load finishes are replaced too, so callers
        should wait for it before mutating (the console does).
        Read or decode failure: collection left as is, LoadFailure reported.
        Returns True if the collection was replaced.
        """
        try:
            raw = await self._storage.get(self._key)
            if not raw:
                logger.info("No stored tasks under key=%s", self._key)
                return False
            tasks = deserialize_tasks(raw)
        except Exception as e:
            failure = LoadFailure(f"Failed to load tasks from {self._key!r}: {e}", key=self._key)
            failure.__cause__ = e
            self._report(failure)
            return False

        self._tasks = tasks
        self._ids.observe(task.id for task in tasks)
        logger.info("Loaded %d tasks from key=%s", len(tasks), self._key)
        self._notify_changed()
        return True

    async def flush(self) -> None:
        """Wait for outstanding background writes."""
        await self._writer.flush()

    # ---- mutations ----

    def add(self, title: str) -> Task | None:
        """Append a new pending task. Returns None if the trimmed title is empty."""
        clean = (title or "").strip()
        if not clean:
            self._notify_validation(EMPTY_TITLE_NOTICE)
            return None

        task = Task(id=self._ids.next_id(), title=clean, completed=False)
        self._tasks = [*self._tasks, task]
        logger.debug("Task added id=%s", task.id)
        self._commit()
        return task

    def toggle_complete(self, task_id: int) -> bool:
        """Flip completed on the matching task. Unknown id: no change (still persisted)."""
        found = False
        updated: list[Task] = []
        for task in self._tasks:
            if task.id == task_id:
                task = Task(id=task.id, title=task.title, completed=not task.completed)
                found = True
            updated.append(task)
        self._tasks = updated
        logger.debug("Task toggle id=%s found=%s", task_id, found)
        self._commit()
        return found

    def delete(self, task_id: int) -> bool:
        """Remove the matching task. Unknown id: no change (still persisted)."""
        kept = [task for task in self._tasks if task.id != task_id]
        removed = len(kept) != len(self._tasks)
        self._tasks = kept
        logger.debug("Task delete id=%s removed=%s", task_id, removed)
        self._commit()
        return removed

    # ---- listeners ----

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- internals ----

    def _commit(self) -> None:
        self._writer.submit(serialize_tasks(self._tasks))
        self._notify_changed()

    def _notify_changed(self) -> None:
        snapshot = self.current_tasks()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Change listener failed.")

    def _notify_validation(self, notice: ValidationNotice) -> None:
        try:
            self._on_validation(notice)
        except Exception:
            logger.exception("Validation listener failed.")

    def _report(self, error: TaskStoreError) -> None:
        try:
            self._on_error(error)
        except Exception:
            logger.exception("Error reporter failed while reporting: %s", error)
