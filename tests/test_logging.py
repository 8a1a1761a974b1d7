from __future__ import annotations

from pathlib import Path

from tasklist.config import Settings
from tasklist.infra.logging import log_file_path


def test_log_file_is_relative_to_working_directory() -> None:
    assert log_file_path(Settings(log_dir="var/log")) == Path("var/log/tasklist.log")
    assert log_file_path(Settings()) == Path("logs/tasklist.log")


def test_absolute_log_dir_is_kept(tmp_path) -> None:
    assert log_file_path(Settings(log_dir=str(tmp_path))) == tmp_path / "tasklist.log"
