"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdkloc.cli import _build_parser, main


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_cli_defaults() -> None:
    args = _build_parser().parse_args([])

    assert args.path == "."
    assert args.ignore == []
    assert args.max_entries is None
    assert args.languages is False


def test_cli_accepts_short_flags() -> None:
    args = _build_parser().parse_args(
        ["src", "-i", "vendor", "-i", "gen", "-v", "-m", "10", "-d", "2", "-n", "-f", "*.rs", "-r"]
    )

    assert args.path == "src"
    assert args.ignore == ["vendor", "gen"]
    assert args.verbose is True
    assert args.max_entries == 10
    assert args.max_depth == 2
    assert args.non_recursive is True
    assert args.filespec == "*.rs"
    assert args.role_breakdown is True


def test_cli_lists_languages(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--languages"])

    out = capsys.readouterr().out
    assert out.startswith("Supported languages:")
    assert "  Rust" in out
    assert "Starting source code analysis" not in out


def test_cli_reports_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "src" / "main.rs", "fn main() {}\n// c\n")
    _write(tmp_path / "tool.py", "x = 1\n")

    main([str(tmp_path)])

    out = capsys.readouterr().out
    assert out.startswith("mdkloc v")
    assert "Starting source code analysis..." in out
    assert "Performance Summary:" in out
    assert "Detailed source code analysis:" in out
    assert "Total files processed: 2" in out
    assert "Total lines processed: 3" in out
    assert "Warning" not in out


def test_cli_role_breakdown(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(
        tmp_path / "lib.rs",
        "fn a() {}\n#[cfg(test)]\nmod tests {\n    #[test]\n    fn t() {}\n}\n",
    )

    main([str(tmp_path), "--role-breakdown"])

    out = capsys.readouterr().out
    assert "Role breakdown (Mainline)" in out
    assert "Role breakdown (Test)" in out
    assert "No test data collected." not in out


def test_cli_verbose_prints_file_details(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "a.py", "# c\nx = 1\n")

    main([str(tmp_path), "--verbose"])

    out = capsys.readouterr().out
    assert "File: " in out
    assert "  Comment lines: 1" in out
    assert "  Mixed code/comment lines: 0" in out


def test_cli_missing_path_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Path does not exist" in capsys.readouterr().err


def test_cli_invalid_filespec_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "a.py", "x = 1\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path), "--filespec", "[abc"])

    assert excinfo.value.code == 1
    assert "Invalid filespec pattern '[abc'" in capsys.readouterr().err


def test_cli_entry_limit_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "a.py", "x = 1\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path), "--max-entries", "0"])

    assert excinfo.value.code == 1
    assert "Too many entries in directory tree" in capsys.readouterr().err


def test_cli_max_depth_warning(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "top.py", "x = 1\n")
    _write(tmp_path / "sub" / "inner.py", "y = 2\n")

    main([str(tmp_path), "--max-depth", "0"])

    captured = capsys.readouterr()
    assert "Warning: 1" in captured.out
    assert "Maximum directory depth (0)" in captured.err


def test_cli_reads_config_from_scanned_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / ".mdkloc.yml", "ignore:\n  - skip\n")
    _write(tmp_path / "keep.py", "x = 1\n")
    _write(tmp_path / "skip" / "gone.py", "y = 2\n")

    main([str(tmp_path)])

    # keep.py plus the YAML config itself
    assert "Total files processed: 2" in capsys.readouterr().out


def test_cli_explicit_config_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "settings" / "custom.yml", "filespec: \"*.rs\"\nmax_depth: 0\n")
    _write(tmp_path / "tree" / "a.rs", "fn a() {}\n")
    _write(tmp_path / "tree" / "b.py", "x = 1\n")

    main([str(tmp_path / "tree"), "--config", str(tmp_path / "settings" / "custom.yml")])

    assert "Total files processed: 1" in capsys.readouterr().out


def test_cli_malformed_config_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / ".mdkloc.yml", "ignore: [unclosed\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)])

    assert excinfo.value.code == 1
    assert "mdkloc:" in capsys.readouterr().err
