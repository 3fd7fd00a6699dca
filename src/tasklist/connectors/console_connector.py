# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable, Sequence

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Task, ValidationNotice

logger = logging.getLogger(__name__)

PROMPT = "> "

InputFunc = Callable[[str], str]


def print_notice(notice: ValidationNotice) -> None:
    """Console stand-in for an alert dialog."""
    print(f"[{notice.title}] {notice.message}")


async def _read_line(input_func: InputFunc, prompt: str) -> str:
    """
    Read one line in a daemon thread.

    A daemon thread (not the default executor) so that a pending input()
    never keeps the process alive after Ctrl+C.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(line: str | None, exc: BaseException | None) -> None:
        if fut.done():
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(line or "")

    def _worker() -> None:
        try:
            line, exc = input_func(prompt), None
        except Exception as e:
            line, exc = None, e
        # The loop may already be closed if the app is shutting down.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, line, exc)

    threading.Thread(target=_worker, name="console-input", daemon=True).start()
    return await fut


async def run_console_loop(
    state: AppState,
    *,
    input_func: InputFunc = input,
    loaded: asyncio.Future[bool] | None = None,
) -> None:
    """
    Interactive task list.

    input() runs off the event loop so the loop keeps serving the initial
    load and background writes while waiting for the user.
    If loaded is given, lines are only dispatched once it has completed.
    """
    logger.info("Console connector started.")
    print("Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")
    print(state.screen.render())

    changed = asyncio.Event()

    def _mark_dirty(_tasks: Sequence[Task]) -> None:
        changed.set()

    unsubscribe = state.store.subscribe(_mark_dirty)
    pending: asyncio.Future[str] | None = None
    try:
        while True:
            if changed.is_set():
                changed.clear()
                print(state.screen.render())

            if pending is None:
                pending = asyncio.ensure_future(_read_line(input_func, PROMPT))

            # A background change (e.g. the initial load finishing) re-renders
            # while the user is still typing; the same input() keeps reading.
            waiter = asyncio.ensure_future(changed.wait())
            try:
                await asyncio.wait({pending, waiter}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                waiter.cancel()
            if not pending.done():
                print()
                print(state.screen.render())
                changed.clear()
                print(PROMPT, end="", flush=True)
                continue

            line_future, pending = pending, None
            try:
                raw = line_future.result()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                print()
                break

            user_input = raw.strip()
            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                if loaded is not None and not loaded.done():
                    # The initial load replaces the collection; mutate only after it.
                    await asyncio.shield(loaded)
                response = command_registry.handle(state, user_input)
                if response is None:
                    # Plain text (blank included): type it into the input field and press Add.
                    state.screen.set_draft(raw)
                    state.screen.submit()
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response:
                print(response)
    finally:
        unsubscribe()
        if pending is not None:
            pending.cancel()

    logger.info("Console connector finished.")
