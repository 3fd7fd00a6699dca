# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.state import AppState
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Any other text is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_ref(tasks: Sequence[Task], raw: str) -> int | None:
    """
    Turn user input into a task id.

    An exact id wins; otherwise a 1-based position in the list.
    """
    try:
        n = int(raw.lstrip("#"))
    except ValueError:
        return None

    for task in tasks:
        if task.id == n:
            return task.id
    if 1 <= n <= len(tasks):
        return tasks[n - 1].id
    return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return state.screen.render()


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.screen.add_task(" ".join(args))
    if task is None:
        # The validation notice has already been delivered to the listener.
        return "Nothing added."
    return f"Added: {task.title}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    """
    /toggle <n|id>  -> flip completed (aliases: /done, /undo)
    """
    if not args:
        return "Usage: /toggle <number or id>."

    task_id = resolve_task_ref(state.screen.current_tasks(), args[0])
    if task_id is None:
        return f"No task {args[0]}."

    state.screen.toggle_task(task_id)
    task = state.store.get(task_id)
    if task is None:
        return f"No task {args[0]}."
    return f"{'Completed' if task.completed else 'Reopened'}: {task.title}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /delete <n|id>  -> remove the task (aliases: /del, /rm)
    """
    if not args:
        return "Usage: /delete <number or id>."

    tasks = state.screen.current_tasks()
    task_id = resolve_task_ref(tasks, args[0])
    if task_id is None:
        return f"No task {args[0]}."

    title = next((t.title for t in tasks if t.id == task_id), "")
    state.screen.delete_task(task_id)
    return f"Deleted: {title}"


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    describe = getattr(state.storage, "describe", None)
    backend = describe() if callable(describe) else type(state.storage).__name__
    writer = store.writer
    return (
        "Status:\n"
        f"  Tasks: {len(store)} ({store.pending_count} pending, {store.completed_count} completed)\n"
        f"  Storage: {backend} key={store.key}\n"
        f"  Writes: policy={writer.policy} ok={writer.writes_ok} failed={writer.writes_failed}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register(
    "toggle",
    cmd_toggle,
    help_text="Complete or undo a task: /toggle <number or id>.",
    aliases=["done", "undo"],
)
registry.register(
    "delete", cmd_delete, help_text="Delete a task: /delete <number or id>.", aliases=["del", "rm"]
)
registry.register("status", cmd_status, help_text="Show counts, storage and write statistics.")
