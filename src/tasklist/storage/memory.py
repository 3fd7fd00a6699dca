# src/tasklist/storage/memory.py

from __future__ import annotations


class InMemoryStorage:
    """Dict-backed KeyValueStorage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def describe(self) -> str:
        return "memory"
