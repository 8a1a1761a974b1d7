from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Callable

from tasklist.config import DEFAULT_TASKS_FILE
from tasklist.domain.codec import MalformedLineError
from tasklist.domain.entities import TaskRecord, validate_title
from tasklist.infra.repository import TaskFileRepository

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


class TaskStore:
    """In-memory task collection with explicit load/save to a task file.

    Records keep insertion order. Ids come from a counter that deletions
    never rewind; only ``load`` recomputes it from the loaded data. Nothing
    is persisted until ``save`` is called.
    """

    def __init__(
        self,
        path: PathLike = DEFAULT_TASKS_FILE,
        repository_factory: Callable[[PathLike], TaskFileRepository] = TaskFileRepository,
    ) -> None:
        self._path = Path(path)
        self._repository_factory = repository_factory
        self._records: list[TaskRecord] = []
        self._next_id = 1
        self.last_error: str | None = None
        # True when the last failed load found no file at all.
        self.last_load_missing = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> tuple[TaskRecord, ...]:
        return tuple(self._records)

    def get(self, task_id: int) -> TaskRecord | None:
        index = self._index_of(task_id)
        return self._records[index] if index is not None else None

    def add(self, title: str, notes: str = "") -> int | None:
        reason = validate_title(title)
        if reason is not None:
            logger.info("Rejected task: %s", reason)
            return None
        record = TaskRecord(id=self._next_id, title=title, notes=notes)
        self._next_id += 1
        self._records.append(record)
        logger.info("Added task %s", record.id)
        return record.id

    def remove(self, task_id: int) -> bool:
        index = self._index_of(task_id)
        if index is None:
            return False
        del self._records[index]
        logger.info("Removed task %s", task_id)
        return True

    def toggle_complete(self, task_id: int) -> bool:
        index = self._index_of(task_id)
        if index is None:
            return False
        record = self._records[index]
        self._records[index] = replace(record, completed=not record.completed)
        return True

    def edit(self, task_id: int, new_title: str, new_notes: str) -> bool:
        # Empty input keeps the current value; a field cannot be cleared here.
        index = self._index_of(task_id)
        if index is None:
            return False
        changes: dict[str, str] = {}
        if new_title.strip():
            reason = validate_title(new_title)
            if reason is None:
                changes["title"] = new_title
            else:
                logger.warning("Keeping title of task %s: %s", task_id, reason)
        if new_notes:
            changes["notes"] = new_notes
        if changes:
            self._records[index] = replace(self._records[index], **changes)
        return True

    def clear_all(self) -> None:
        self._records.clear()
        logger.info("Cleared all tasks")

    def load(self, source: PathLike | None = None) -> bool:
        repository = self._repository_factory(source if source is not None else self._path)
        try:
            lines = repository.read_lines()
        except FileNotFoundError:
            logger.info("No task file at %s yet", repository.path)
            self.last_error = f"{repository.path} does not exist"
            self.last_load_missing = True
            return False
        except OSError as exc:
            self.last_load_missing = False
            logger.error("Failed to read %s: %s", repository.path, exc)
            self.last_error = str(exc)
            return False

        records: list[TaskRecord] = []
        seen: set[int] = set()
        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                record = TaskRecord.from_line(line)
            except MalformedLineError as exc:
                logger.warning("Skipping line %d of %s: %s", line_no, repository.path, exc)
                continue
            if record.id in seen:
                logger.warning(
                    "Skipping line %d of %s: duplicate id %d", line_no, repository.path, record.id
                )
                continue
            seen.add(record.id)
            records.append(record)

        self._records = records
        self._next_id = max(seen, default=0) + 1
        self.last_error = None
        self.last_load_missing = False
        logger.info("Loaded %d tasks from %s", len(records), repository.path)
        return True

    def save(self, destination: PathLike | None = None) -> bool:
        repository = self._repository_factory(
            destination if destination is not None else self._path
        )
        try:
            repository.write_lines(record.to_line() for record in self._records)
        except (OSError, UnicodeError) as exc:
            logger.error("Failed to write %s: %s", repository.path, exc)
            self.last_error = str(exc)
            return False
        self.last_error = None
        logger.info("Saved %d tasks to %s", len(self._records), repository.path)
        return True

    def _index_of(self, task_id: int) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == task_id:
                return index
        return None
