"""Tests for mdkloc.reader."""

from __future__ import annotations

import io
from pathlib import Path

from mdkloc.reader import first_nonempty_line, iter_lossy_lines, read_lines


def test_crlf_and_lf_endings_read_identically(tmp_path: Path) -> None:
    lf = tmp_path / "lf.txt"
    crlf = tmp_path / "crlf.txt"
    lf.write_bytes(b"a\nb\n")
    crlf.write_bytes(b"a\r\nb\r\n")

    assert read_lines(lf) == read_lines(crlf) == ["a", "b"]


def test_missing_final_newline_still_yields_last_line() -> None:
    assert list(iter_lossy_lines(io.BytesIO(b"one\ntwo"))) == ["one", "two"]


def test_invalid_utf8_is_replaced() -> None:
    lines = list(iter_lossy_lines(io.BytesIO(b"ok\n\xff\xfe bad\n")))

    assert lines[0] == "ok"
    assert lines[1].startswith("�")
    assert lines[1].endswith(" bad")


def test_empty_file_has_no_lines(tmp_path: Path) -> None:
    empty = tmp_path / "empty.rs"
    empty.write_bytes(b"")

    assert read_lines(empty) == []
    assert first_nonempty_line(empty) is None


def test_first_nonempty_line_skips_whitespace(tmp_path: Path) -> None:
    path = tmp_path / "proc.com"
    path.write_bytes(b"\n   \n$ set verify\n")

    assert first_nonempty_line(path) == "$ set verify"
