from __future__ import annotations

import pytest

from tasklist.infra import repository as repository_module
from tasklist.infra.repository import TaskFileRepository


def test_write_then_read_lines(tmp_path) -> None:
    repo = TaskFileRepository(tmp_path / "tasks.csv")

    repo.write_lines(["1,0,a,b", "2,1,c,"])

    assert (tmp_path / "tasks.csv").read_text(encoding="utf-8") == "1,0,a,b\n2,1,c,\n"
    assert repo.read_lines() == ["1,0,a,b", "2,1,c,"]


def test_read_lines_strips_crlf(tmp_path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_bytes(b"1,0,a,b\r\n2,0,c,d\r\n")

    assert TaskFileRepository(path).read_lines() == ["1,0,a,b", "2,0,c,d"]


def test_read_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        TaskFileRepository(tmp_path / "missing.csv").read_lines()


def test_failed_write_keeps_previous_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text("1,0,old,\n", encoding="utf-8")

    def broken_replace(src, dst) -> None:
        raise OSError("disk full (simulated)")

    monkeypatch.setattr(repository_module.os, "replace", broken_replace)

    with pytest.raises(OSError):
        TaskFileRepository(path).write_lines(["2,0,new,"])

    assert path.read_text(encoding="utf-8") == "1,0,old,\n"
    assert not (tmp_path / "tasks.csv.tmp").exists()


def test_read_lines_keeps_undecodable_bytes_as_surrogates(tmp_path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_bytes(b"1,0,good,\n2,0,caf\xe9,latin1\n")

    assert TaskFileRepository(path).read_lines() == ["1,0,good,", "2,0,caf\udce9,latin1"]


def test_unencodable_write_keeps_previous_file(tmp_path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text("1,0,old,\n", encoding="utf-8")

    with pytest.raises(UnicodeEncodeError):
        TaskFileRepository(path).write_lines(["2,0,bad \udce9 byte,"])

    assert path.read_text(encoding="utf-8") == "1,0,old,\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.csv"]
