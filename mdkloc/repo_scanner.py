"""Directory traversal, filtering and per-directory aggregation."""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from fnmatch import fnmatchcase, translate
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Protocol, Sequence

from .config import ScanOptions
from .counter import count_file
from .logging import get_logger
from .models import DirectoryStats, FileCount, ScanReport

logger = get_logger("scanner")

_EXCLUDED_DIRS = {
    "target",
    "node_modules",
    "build",
    "dist",
    ".git",
    "venv",
    "__pycache__",
    "bin",
    "obj",
}

FAULTS_ENV = "MDKLOC_ENABLE_FAULTS"
_METADATA_FAULT = "__mdkloc_metadata_fail__"
_READ_DIR_FAULT = "__mdkloc_read_dir_fail__"
_FILE_TYPE_FAULT = "__mdkloc_file_type_fail__"


class FilespecError(ValueError):
    """Raised when the --filespec glob cannot be compiled."""


class EntryLimitExceeded(RuntimeError):
    """Raised when more files than --max-entries pass the filters."""


@dataclass
class IgnoreRule:
    """Represents an ignore rule from --ignore, .mdkloc.yml or .gitignore."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        target = rel_path
        if self.anchored or self.has_slash:
            if fnmatchcase(target, self.pattern):
                return True
            if target.endswith(f"/{self.pattern}") and not self.anchored:
                return True
            return False

        for part in target.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip().replace("\\", "/")
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern.rstrip("/")

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    has_slash = "/" in pattern
    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash=has_slash,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def build_ignore_rules(root: Path, options: ScanOptions) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    if options.use_gitignore:
        base = root if root.is_dir() else root.parent
        rules.extend(_parse_gitignore(base / ".gitignore"))
    for pattern in options.ignore:
        rule = _build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def compile_filespec(spec: Optional[str]) -> Optional[Pattern[str]]:
    """Compile a glob into a regex; unbalanced brackets are rejected."""
    if spec is None:
        return None
    depth = 0
    for char in spec:
        if char == "[":
            depth += 1
        elif char == "]" and depth:
            depth -= 1
    if depth:
        raise FilespecError(f"Invalid filespec pattern '{spec}': unclosed character class")
    try:
        return re.compile(translate(spec))
    except re.error as exc:
        raise FilespecError(f"Invalid filespec pattern '{spec}': {exc}") from exc


def filespec_matches(pattern: Pattern[str], root: Path, path: Path) -> bool:
    """Match against the file name first, then the root-relative POSIX path."""
    if pattern.match(path.name):
        return True
    try:
        relative = path.relative_to(root)
    except ValueError:
        return False
    return bool(pattern.match(relative.as_posix()))


def _faults_enabled() -> bool:
    return os.environ.get(FAULTS_ENV) == "1"


def _stat(path: Path) -> os.stat_result:
    if _faults_enabled() and path.name == _METADATA_FAULT:
        raise OSError(f"simulated metadata failure for {path}")
    return path.stat()


def _list_dir(path: Path) -> List[os.DirEntry[str]]:
    if _faults_enabled() and path.name == _READ_DIR_FAULT:
        raise OSError(f"simulated read_dir failure for {path}")
    with os.scandir(path) as iterator:
        return sorted(iterator, key=lambda entry: entry.name)


def _entry_kind(entry: os.DirEntry[str]) -> str:
    if _faults_enabled() and entry.name.startswith(_FILE_TYPE_FAULT):
        raise OSError(f"simulated file type failure for {entry.path}")
    if entry.is_symlink():
        return "symlink"
    if entry.is_dir(follow_symlinks=False):
        return "dir"
    if entry.is_file(follow_symlinks=False):
        return "file"
    return "other"


class ProgressSink(Protocol):
    """Receives one call per counted file."""

    def update(self, lines: int) -> None:
        ...


class TreeScanner:
    """Walks a directory tree and aggregates per-directory language statistics."""

    def __init__(
        self,
        options: ScanOptions,
        *,
        progress: Optional[ProgressSink] = None,
        on_file: Optional[Callable[[FileCount], None]] = None,
    ) -> None:
        self.options = options
        self._progress = progress
        self._on_file = on_file
        self._filespec: Optional[Pattern[str]] = None
        self._rules: List[IgnoreRule] = []
        self._entries = 0

    def scan(self, path: str | Path) -> ScanReport:
        """Return a report for ``path``; raises FileNotFoundError when missing."""
        requested = Path(path).expanduser()
        if not requested.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")

        self._filespec = compile_filespec(self.options.filespec)
        root = requested.resolve()
        self._rules = build_ignore_rules(root, self.options)
        self._entries = 0

        report = ScanReport(root=root)
        self._scan_path(root, root, 0, report)
        return report

    def _scan_path(self, path: Path, root: Path, depth: int, report: ScanReport) -> None:
        if depth > self.options.max_depth:
            logger.warning(
                "Maximum directory depth (%d) reached at %s", self.options.max_depth, path
            )
            report.error_count += 1
            return
        if self.options.non_recursive and depth > 0:
            return
        if depth > 0 and self._is_ignored(path, root, is_dir=True):
            return

        try:
            metadata = _stat(path)
        except OSError as exc:
            logger.error("Error reading metadata for %s: %s", path, exc)
            report.error_count += 1
            return

        if stat.S_ISREG(metadata.st_mode):
            if depth == 0:
                self._process_file(path, path.parent, report)
            return
        if not stat.S_ISDIR(metadata.st_mode):
            return

        try:
            entries = _list_dir(path)
        except OSError as exc:
            logger.error("Error reading directory %s: %s", path, exc)
            report.error_count += 1
            return

        for entry in entries:
            entry_path = Path(entry.path)
            try:
                kind = _entry_kind(entry)
            except OSError as exc:
                logger.error("Error reading type for %s: %s", entry_path, exc)
                report.error_count += 1
                continue

            if kind == "dir":
                if self.options.non_recursive:
                    continue
                self._scan_path(entry_path, root, depth + 1, report)
            elif kind == "file":
                if self._is_ignored(entry_path, root, is_dir=False):
                    continue
                self._process_file(entry_path, root, report)

    def _is_ignored(self, path: Path, root: Path, *, is_dir: bool) -> bool:
        if is_dir and path.name in _EXCLUDED_DIRS:
            return True
        if not self._rules:
            return False
        try:
            rel_path = path.relative_to(root).as_posix()
        except ValueError:
            rel_path = path.name
        return _should_ignore(rel_path, is_dir, self._rules)

    def _process_file(self, path: Path, root: Path, report: ScanReport) -> None:
        if self._filespec is not None and not filespec_matches(self._filespec, root, path):
            return

        self._entries += 1
        if self._entries > self.options.max_entries:
            raise EntryLimitExceeded("Too many entries in directory tree")

        try:
            file_count = count_file(path, root)
        except OSError as exc:
            logger.error("Error counting lines in %s: %s", path, exc)
            report.error_count += 1
            return
        if file_count is None:
            return

        report.files_processed += 1
        report.lines_processed += file_count.total_lines
        if self._progress is not None:
            self._progress.update(file_count.total_lines)

        if file_count.stats.is_empty() and file_count.total_lines > 0:
            return
        report.directories.setdefault(path.parent, DirectoryStats()).record(file_count)
        if self._on_file is not None:
            self._on_file(file_count)


__all__ = [
    "EntryLimitExceeded",
    "FAULTS_ENV",
    "FilespecError",
    "IgnoreRule",
    "ProgressSink",
    "TreeScanner",
    "compile_filespec",
    "filespec_matches",
]
