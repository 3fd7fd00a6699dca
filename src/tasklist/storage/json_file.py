# src/tasklist/storage/json_file.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import threading
from pathlib import Path

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    KeyValueStorage kept in a single JSON object file: {"<key>": "<value>", ...}.

    - writes go to a temp file first, then os.replace() (no torn files)
    - the file is made private (0600) best-effort
    - a lock serializes read-modify-write cycles across worker threads
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return f"json:{self._path}"

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set_sync, key, value)

    # ---- blocking helpers (run in a worker thread) ----

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} must contain a JSON object")
        return data

    def _get_sync(self, key: str) -> str | None:
        with self._lock:
            value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self._path} is not a string")
        return value

    def _set_sync(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                tmp = self._path.with_suffix(self._path.suffix + ".tmp")
                tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
                os.replace(tmp, self._path)
            except OSError as e:
                raise StorageError(f"Cannot write {self._path}: {e}") from e
            with contextlib.suppress(OSError):
                os.chmod(self._path, 0o600)
        logger.debug("Wrote key=%s to %s", key, self._path)
