from __future__ import annotations

import logging
from typing import Callable, Iterable

from tasklist.domain.entities import TaskRecord, validate_title
from tasklist.services.task_store import TaskStore

logger = logging.getLogger(__name__)

MENU_ITEMS = [
    "List tasks",
    "Add task",
    "Toggle complete",
    "Edit task",
    "Remove task",
    "Clear all tasks",
    "Save",
    "Load",
    "Exit",
]


class _EndOfInput(Exception):
    pass


def format_tasks(tasks: Iterable[TaskRecord]) -> str:
    tasks = list(tasks)
    if not tasks:
        return "No tasks found."
    lines = [
        "",
        f"{'ID':<6}{'Status':<12}{'Title':<30}Notes",
        "=" * 75,
    ]
    for task in tasks:
        status = "Complete" if task.completed else "Open"
        lines.append(f"{task.id:<6}{status:<12}{task.title:<30}{task.notes}")
    lines.append("")
    return "\n".join(lines)


class ConsoleShell:
    """Numbered menu over a TaskStore. Holds no task state of its own."""

    def __init__(
        self,
        store: TaskStore,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.store = store
        self._input = input_fn
        self._output = output_fn
        # Off while the task file exists but could not be read.
        self._autosave = True
        self._actions: dict[int, Callable[[], bool]] = {
            1: self.list_tasks,
            2: self.add_task,
            3: self.toggle_task,
            4: self.edit_task,
            5: self.remove_task,
            6: self.clear_tasks,
            7: self.save_tasks,
            8: self.load_tasks,
            9: self.exit,
        }

    def run(self) -> None:
        self._autosave = self._startup_load()
        while True:
            self._print_menu()
            try:
                choice = self._read_int(f"Choose an option [1-{len(MENU_ITEMS)}]: ")
                self._output("")
                action = self._actions.get(choice)
                if action is None:
                    self._output("Invalid choice.\n")
                    continue
                if not action():
                    break
            except _EndOfInput:
                self._output("")
                self.exit()
                break

    def list_tasks(self) -> bool:
        self._output(format_tasks(self.store.list()))
        return True

    def add_task(self) -> bool:
        title = self._read_line("Enter title: ")
        reason = validate_title(title)
        while reason is not None:
            self._output(reason)
            title = self._read_line("Enter title: ")
            reason = validate_title(title)
        notes = self._read_line("Enter notes (optional): ")
        task_id = self.store.add(title, notes)
        self._output(f"Added task with id {task_id}.\n")
        return True

    def toggle_task(self) -> bool:
        task_id = self._read_int("Enter task id to toggle: ")
        if self.store.toggle_complete(task_id):
            self._output("Toggled completion.\n")
        else:
            self._output("Task not found.\n")
        return True

    def edit_task(self) -> bool:
        task_id = self._read_int("Enter task id to edit: ")
        new_title = self._read_title_or_blank("New title (leave blank to keep): ")
        new_notes = self._read_line("New notes (leave blank to keep): ")
        if self.store.edit(task_id, new_title, new_notes):
            self._output("Edited task.\n")
        else:
            self._output("Task not found.\n")
        return True

    def remove_task(self) -> bool:
        task_id = self._read_int("Enter task id to remove: ")
        if self.store.remove(task_id):
            self._output("Removed task.\n")
        else:
            self._output("Task not found.\n")
        return True

    def clear_tasks(self) -> bool:
        confirm = self._read_line("Are you sure you want to clear all tasks? [y/N]: ")
        if confirm[:1] in ("y", "Y"):
            self.store.clear_all()
            self._output("All tasks cleared.\n")
        else:
            self._output("Canceled.\n")
        return True

    def save_tasks(self) -> bool:
        if self.store.save():
            self._autosave = True
            self._output(f"Saved to {self.store.path}\n")
        else:
            self._output(f"Save failed: {self.store.last_error}\n")
        return True

    def load_tasks(self) -> bool:
        if self.store.load():
            self._autosave = True
            self._output(f"Loaded from {self.store.path}\n")
        else:
            self._output("Load failed or no file yet.\n")
        return True

    def exit(self) -> bool:
        if not self._autosave:
            self._output(f"Not saving over {self.store.path}, it could not be loaded.")
        elif not self.store.save():
            self._output(f"Save failed: {self.store.last_error}")
        self._output("Goodbye.")
        return False

    def _startup_load(self) -> bool:
        if self.store.load():
            return True
        if self.store.last_load_missing:
            logger.info("Starting with an empty task list")
            return True
        self._output(f"Could not load {self.store.path}: {self.store.last_error}")
        self._output("It will not be saved on exit unless you save or load explicitly.\n")
        return False

    def _print_menu(self) -> None:
        self._output("=============================")
        self._output("       To Do List Menu       ")
        self._output("=============================")
        for number, label in enumerate(MENU_ITEMS, start=1):
            self._output(f"{number}. {label}")

    def _read_line(self, prompt: str) -> str:
        try:
            value = self._input(prompt)
        except EOFError as exc:
            raise _EndOfInput from exc
        except KeyboardInterrupt as exc:
            logger.info("Console KeyboardInterrupt, exiting.")
            raise _EndOfInput from exc
        # Undecodable terminal bytes arrive as lone surrogates.
        return value.encode("utf-8", "replace").decode("utf-8").strip()

    def _read_title_or_blank(self, prompt: str) -> str:
        while True:
            title = self._read_line(prompt)
            reason = validate_title(title)
            if not title or reason is None:
                return title
            self._output(reason)

    def _read_int(self, prompt: str) -> int:
        while True:
            value = self._read_line(prompt)
            try:
                return int(value)
            except ValueError:
                self._output("Invalid number. Try again.")
