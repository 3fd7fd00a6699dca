# src/tasklist/tasks/task_api.py

"""
UI-facing surface of the task list.

TaskListScreen is what a front-end talks to: it owns the pending input text
and forwards user actions to the TaskStore. Rendering is a pure projection of
the current snapshot.
"""

from __future__ import annotations

from collections.abc import Sequence

from .task_models import Task
from .task_store import TaskStore

EMPTY_LIST_TEXT = "No tasks yet. Type a task and press Enter to add it."


def action_label(task: Task) -> str:
    return "Undo" if task.completed else "Complete"


def format_task_line(position: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"{position:>3}. [{mark}] {task.title}  (#{task.id}; {action_label(task)} | Delete)"


def render_task_list(tasks: Sequence[Task], *, header: str = "Todo List") -> str:
    lines = [header, "-" * len(header)]
    if not tasks:
        lines.append(EMPTY_LIST_TEXT)
    else:
        lines.extend(format_task_line(i, task) for i, task in enumerate(tasks, start=1))
    return "\n".join(lines)


class TaskListScreen:
    def __init__(self, store: TaskStore, *, header: str = "Todo List") -> None:
        self.store = store
        self.header = header
        self.draft = ""

    def set_draft(self, text: str) -> None:
        self.draft = text

    def submit(self) -> Task | None:
        """Add the draft as a task; the draft is cleared only when it was accepted."""
        task = self.store.add(self.draft)
        if task is not None:
            self.draft = ""
        return task

    def current_tasks(self) -> tuple[Task, ...]:
        return self.store.current_tasks()

    def add_task(self, title: str) -> Task | None:
        self.set_draft(title)
        return self.submit()

    def toggle_task(self, task_id: int) -> bool:
        return self.store.toggle_complete(task_id)

    def delete_task(self, task_id: int) -> bool:
        return self.store.delete(task_id)

    def render(self) -> str:
        return render_task_list(self.current_tasks(), header=self.header)
