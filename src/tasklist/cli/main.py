# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the initial load in the
background (the empty list renders immediately), then runs the console REPL.
Outstanding writes are flushed before exit.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_notice, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.store.flush()
    except Exception:
        logger.exception("Failed to flush pending task writes.")


async def run_app(state: AppState) -> None:
    load_task = asyncio.create_task(state.store.load(), name="initial-load")
    try:
        await run_console_loop(state, loaded=load_task)
    finally:
        if not load_task.done():
            await load_task
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, on_validation=print_notice)

    try:
        asyncio.run(run_app(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
