from __future__ import annotations

from dataclasses import dataclass

from .codec import (
    ESCAPE_CHAR,
    FIELD_COUNT,
    MalformedLineError,
    escape_field,
    is_decimal,
    is_encodable,
    join_fields,
    split_fields,
    unescape_field,
)


def validate_title(title: str) -> str | None:
    """Return why ``title`` cannot be stored, or None if it can.

    The title is not the last field on a line, so a trailing backslash
    would escape the separator after it.
    """
    if not title.strip():
        return "Title cannot be empty."
    if title.endswith(ESCAPE_CHAR):
        return "Title cannot end with a backslash."
    return None


@dataclass(frozen=True)
class TaskRecord:
    id: int
    title: str
    notes: str = ""
    completed: bool = False

    def to_line(self) -> str:
        return join_fields([
            str(self.id),
            "1" if self.completed else "0",
            escape_field(self.title),
            escape_field(self.notes),
        ])

    @classmethod
    def from_line(cls, line: str) -> TaskRecord:
        if not is_encodable(line):
            raise MalformedLineError("line is not valid UTF-8")
        fields = split_fields(line)
        if len(fields) != FIELD_COUNT:
            raise MalformedLineError(f"expected {FIELD_COUNT} fields, got {len(fields)}")

        raw_id, raw_completed, raw_title, raw_notes = fields
        if not is_decimal(raw_id):
            raise MalformedLineError(f"id is not a decimal number: {raw_id!r}")
        if not is_decimal(raw_completed):
            raise MalformedLineError(f"completed flag is not a number: {raw_completed!r}")
        task_id = int(raw_id)
        if task_id == 0:
            raise MalformedLineError("id must be positive, got 0")

        return cls(
            id=task_id,
            title=unescape_field(raw_title),
            notes=unescape_field(raw_notes),
            completed=int(raw_completed) != 0,
        )
