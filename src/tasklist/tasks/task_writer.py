# src/tasklist/tasks/task_writer.py

from __future__ import annotations

"""
Background persistence of serialized task snapshots.

Callers hand over an already-serialized snapshot and return immediately.
Two policies:
- serial: one write in flight at a time; while it runs, newer snapshots
  replace the queued one, so the last submitted snapshot is written last.
- concurrent: every snapshot is written by its own task with no ordering
  guarantee between them (last write wins only if both complete in order).

Failures go to on_failure as SaveFailure; there are no retries.
"""

import asyncio
import logging
from collections.abc import Callable

from ..core.errors import SaveFailure
from ..core.ports import KeyValueStorage

logger = logging.getLogger(__name__)

SERIAL = "serial"
CONCURRENT = "concurrent"


class TaskWriter:
    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        *,
        on_failure: Callable[[SaveFailure], None],
        policy: str = SERIAL,
    ) -> None:
        if policy not in (SERIAL, CONCURRENT):
            raise ValueError(f"unknown write policy: {policy!r}")

        self._storage = storage
        self._key = key
        self._on_failure = on_failure
        self._policy = policy

        self._queued: str | None = None
        self._runner: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[bool]] = set()

        self.writes_ok = 0
        self.writes_failed = 0

    @property
    def policy(self) -> str:
        return self._policy

    @property
    def idle(self) -> bool:
        runner_busy = self._runner is not None and not self._runner.done()
        return not runner_busy and not self._inflight and self._queued is None

    def submit(self, payload: str) -> None:
        """Schedule a write of payload. Never blocks on the event loop, never raises."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            # No event loop (plain synchronous caller): write inline.
            asyncio.run(self._write(payload))
            return

        if self._policy == CONCURRENT:
            task = loop.create_task(self._write(payload))
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            return

        if self._queued is not None:
            logger.debug("Superseding queued snapshot for key=%s", self._key)
        self._queued = payload
        if self._runner is None or self._runner.done():
            self._runner = loop.create_task(self._drain())

    async def flush(self) -> None:
        """Wait until every submitted snapshot has been written (or has failed)."""
        while not self.idle:
            if self._runner is None or self._runner.done():
                # Runner gone with a snapshot still queued: start a new one.
                if self._queued is not None:
                    self._runner = asyncio.get_running_loop().create_task(self._drain())
            if self._runner is not None and not self._runner.done():
                await asyncio.gather(self._runner, return_exceptions=True)
            if self._inflight:
                await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _drain(self) -> None:
        while self._queued is not None:
            payload, self._queued = self._queued, None
            await self._write(payload)

    async def _write(self, payload: str) -> bool:
        try:
            await self._storage.set(self._key, payload)
        except Exception as e:
            self.writes_failed += 1
            failure = SaveFailure(f"Failed to save tasks under {self._key!r}: {e}", key=self._key)
            failure.__cause__ = e
            try:
                self._on_failure(failure)
            except Exception:
                logger.exception("Save failure hook crashed (key=%s).", self._key)
            return False

        self.writes_ok += 1
        logger.debug("Saved tasks key=%s bytes=%d", self._key, len(payload))
        return True
