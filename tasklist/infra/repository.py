from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable


class TaskFileRepository:
    """Line-oriented access to the persisted task file.

    Reads return the raw lines without their terminators. Bytes that are not
    valid UTF-8 come back as lone surrogates, so decoding never fails and the
    caller decides what to do with such a line. Writes go to a sibling temp
    file that replaces the target only once fully written, so a failed write
    never leaves a truncated task file or a stray temp file behind.
    ``OSError`` and ``UnicodeError`` are propagated to the caller.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_lines(self) -> list[str]:
        with open(
            self._path, "r", encoding="utf-8", errors="surrogateescape", newline=""
        ) as handle:
            return [line.rstrip("\r\n") for line in handle]

    def write_lines(self, lines: Iterable[str]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(line)
                    handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, UnicodeError):
            tmp_path.unlink(missing_ok=True)
            raise
