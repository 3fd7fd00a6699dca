# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening src/tasklist/config.py.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "Header shown above the list (default: Todo List).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data + log directory (default: .local/tasklist).",
    "TASKLIST_STORAGE_PATH": "JSON backend file (default: <data_dir>/storage.json).",
    "TASKLIST_STORAGE_DB_PATH": "SQLite backend file (default: <data_dir>/storage.sqlite3).",
    # Persistence
    "TASKLIST_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "TASKLIST_STORAGE_KEY": "Key the task list is stored under (default: @tasks).",
    "TASKLIST_WRITE_POLICY": (
        "serial (one write at a time, newest snapshot wins) | "
        "concurrent (every change written independently, unordered). Default: serial."
    ),
}
