# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Malformed values fall back to defaults instead of failing at import time.
- Everything local lives under a gitignored data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

STORAGE_BACKENDS = ("json", "sqlite", "memory")
WRITE_POLICIES = ("serial", "concurrent")

DEFAULT_STORAGE_KEY = "@tasks"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path
    storage_db_path: Path

    # ---- Persistence ----
    storage_backend: str
    storage_key: str
    write_policy: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Todo List").strip() or "Todo List"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.json")
        storage_db_path = _env_path(_k("STORAGE_DB_PATH"), data_dir / "storage.sqlite3")

        storage_backend = _env_choice(_k("STORAGE_BACKEND"), "json", STORAGE_BACKENDS)
        # The key is opaque: keep it verbatim, only reject an empty one.
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY) or DEFAULT_STORAGE_KEY
        write_policy = _env_choice(_k("WRITE_POLICY"), "serial", WRITE_POLICIES)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_db_path=storage_db_path,
            storage_backend=storage_backend,
            storage_key=storage_key,
            write_policy=write_policy,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
