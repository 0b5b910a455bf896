"""Tests for mdkloc.counter."""

from __future__ import annotations

from pathlib import Path

from mdkloc.counter import count_file, count_lines
from mdkloc.models import CodeRole, FileRoleHint

RUST_WITH_TESTS = """pub fn add(a: i32, b: i32) -> i32 {
    // adds
    a + b
}

#[cfg(test)]
mod tests {
    use super::*;

    #[test]
    fn adds() {
        assert_eq!(add(1, 2), 3);
    }
}
"""


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_count_lines_returns_normalized_triple(tmp_path: Path) -> None:
    path = _write(tmp_path / "main.c", "/* open\n*/ tail();\n\nint x;\n")

    result = count_lines(path)

    assert result is not None
    assert result.total_lines == 4
    stats = result.stats
    assert (stats.code, stats.comment, stats.blank, stats.overlap) == (2, 2, 1, 1)


def test_count_lines_skips_unknown_names(tmp_path: Path) -> None:
    assert count_lines(_write(tmp_path / "LICENSE", "MIT\n")) is None


def test_count_file_splits_inline_rust_tests(tmp_path: Path) -> None:
    path = _write(tmp_path / "src" / "lib.rs", RUST_WITH_TESTS)

    counted = count_file(path, tmp_path)

    assert counted is not None
    assert counted.language == "Rust"
    assert counted.total_lines == 14
    mainline = counted.roles[CodeRole.MAINLINE]
    test = counted.roles[CodeRole.TEST]
    assert (mainline.code, mainline.comment, mainline.blank) == (3, 1, 1)
    assert (test.code, test.comment, test.blank) == (8, 0, 1)
    assert mainline.lines + test.lines == counted.total_lines


def test_count_file_puts_test_directory_files_in_test_role(tmp_path: Path) -> None:
    path = _write(tmp_path / "tests" / "it.rs", RUST_WITH_TESTS)

    counted = count_file(path, tmp_path)

    assert counted is not None
    assert set(counted.roles) == {CodeRole.TEST}
    assert counted.roles[CodeRole.TEST].lines == 14


def test_count_file_honours_explicit_hint(tmp_path: Path) -> None:
    path = _write(tmp_path / "app.py", "x = 1\n")

    counted = count_file(path, hint=FileRoleHint.TEST_FILE)

    assert counted is not None
    assert set(counted.roles) == {CodeRole.TEST}


def test_empty_file_counts_as_zero(tmp_path: Path) -> None:
    path = _write(tmp_path / "empty.py", "")

    counted = count_file(path, tmp_path)

    assert counted is not None
    assert counted.total_lines == 0
    assert counted.stats.is_empty()
    assert set(counted.roles) == {CodeRole.MAINLINE}


def test_crlf_file_matches_lf_file(tmp_path: Path) -> None:
    lf = tmp_path / "a.py"
    crlf = tmp_path / "b.py"
    lf.write_bytes(b'"""doc"""\nx = 1\n\n# c\n')
    crlf.write_bytes(b'"""doc"""\r\nx = 1\r\n\r\n# c\r\n')

    first = count_lines(lf)
    second = count_lines(crlf)

    assert first is not None and second is not None
    assert first.stats == second.stats


def test_invalid_utf8_does_not_change_counts(tmp_path: Path) -> None:
    valid = tmp_path / "valid.rs"
    invalid = tmp_path / "invalid.rs"
    valid.write_bytes(b"// note ?\nfn main() {}\n")
    invalid.write_bytes(b"// note \xff\nfn main() {}\n")

    first = count_lines(valid)
    second = count_lines(invalid)

    assert first is not None and second is not None
    assert first.stats == second.stats
