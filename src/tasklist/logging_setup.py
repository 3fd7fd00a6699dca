# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - allow tasklist logs (the handler level still applies)
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "tasklist" or name.startswith("tasklist."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send tasklist logs to stderr (at console_level, library noise dropped)
    and everything at file_level to <log_dir>/tasklist.log.

    Replaces whatever handlers the root logger had, so calling it again
    reconfigures rather than duplicates. Returns the log file path.
    """
    log_file = Path(log_dir) / "tasklist.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_ConsoleNoiseFilter())
    file = logging.FileHandler(log_file, encoding="utf-8")

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(logging.DEBUG)

    for handler, level in ((console, console_level), (file, file_level)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # warnings.warn() lands on the "py.warnings" logger, filtered above.
    logging.captureWarnings(True)
    return log_file
