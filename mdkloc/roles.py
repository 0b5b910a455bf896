"""Mainline versus test role inference for files and Rust source lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .models import CodeRole, FileRoleHint

_TEST_DIRS = {"tests", "test", "testdata", "__tests__"}
_TEST_SUFFIX_EXTENSIONS = {"rs", "go", "py"}

_ATTRIBUTE_PATH = re.compile(r"#!?\[\s*([A-Za-z_][\w:]*)")
_TEST_TOKEN = re.compile(r"(?<=[(, ])test(?=[), ])")


def _is_test_name(file_name: str) -> bool:
    lower = file_name.lower()
    parts = lower.split(".")
    if len(parts) >= 3 and parts[-2] in {"spec", "test"}:
        return True
    stem, _, extension = lower.rpartition(".")
    if extension in _TEST_SUFFIX_EXTENSIONS and stem.endswith("_test"):
        return True
    return extension == "py" and stem.startswith("test_")


def infer_role(root: Optional[Path], path: Path) -> FileRoleHint:
    """Classify ``path`` from its name and its location below ``root``."""
    path = Path(path)
    if _is_test_name(path.name):
        return FileRoleHint.TEST_FILE
    if root is None:
        return FileRoleHint.UNKNOWN
    try:
        relative = path.relative_to(root)
    except ValueError:
        return FileRoleHint.UNKNOWN
    if any(part.lower() in _TEST_DIRS for part in relative.parts[:-1]):
        return FileRoleHint.TEST_FILE
    return FileRoleHint.MAINLINE_FILE


def uniform_role(hint: FileRoleHint) -> CodeRole:
    return CodeRole.TEST if hint is FileRoleHint.TEST_FILE else CodeRole.MAINLINE


def line_roles(
    path: Path, lines: Sequence[str], hint: FileRoleHint = FileRoleHint.UNKNOWN
) -> List[CodeRole]:
    """Return one role per line of ``path``.

    Rust files outside test locations are tracked line by line; every other file
    takes the single role implied by ``hint``.
    """
    base = uniform_role(hint)
    if base is CodeRole.TEST or Path(path).suffix.lower() != ".rs":
        return [base] * len(lines)
    return RustRoleTracker().track(lines)


def classify_attribute(trimmed: str) -> Optional[bool]:
    """Return True for test markers, False for ``cfg(not(test))``, else None."""
    match = _ATTRIBUTE_PATH.match(trimmed)
    if match is None:
        return None
    attribute = match.group(1)
    if attribute.split("::")[-1] == "test":
        return True
    if attribute != "cfg":
        return None
    arguments = trimmed[match.end():]
    compact = arguments.replace(" ", "")
    if "not(test" in compact:
        return False
    if compact.startswith("(test") or _TEST_TOKEN.search(arguments):
        return True
    return None


@dataclass
class _Scope:
    open_depth: int


class RustRoleTracker:
    """Follows ``cfg(test)``/``#[test]`` items through brace nesting.

    Braces are only counted outside string, raw string, character literals and
    comments. Attributes are matched per line, so an attribute split over several
    lines is not recognized.
    """

    def __init__(self) -> None:
        self._depth = 0
        # Open ( and [ outside literals; an item-ending ; only counts at zero.
        self._nesting = 0
        self._scopes: List[_Scope] = []
        self._pending_test = False
        self._whole_file_test = False
        # Open string literal as (terminator, honors backslash escapes).
        self._string: Optional[Tuple[str, bool]] = None
        self._comment_depth = 0

    def track(self, lines: Sequence[str]) -> List[CodeRole]:
        roles = [self._track_line(line) for line in lines]
        if self._whole_file_test:
            return [CodeRole.TEST] * len(roles)
        return roles

    def _track_line(self, line: str) -> CodeRole:
        is_test = bool(self._scopes) or self._pending_test

        if self._string is None and self._comment_depth == 0:
            trimmed = line.strip()
            marker = classify_attribute(trimmed)
            if marker is True:
                if trimmed.startswith("#!["):
                    self._whole_file_test = True
                else:
                    self._pending_test = True
                    is_test = True
            elif marker is False:
                self._pending_test = False

        if self._scan_line(line):
            is_test = True
        return CodeRole.TEST if is_test else CodeRole.MAINLINE

    def _scan_line(self, line: str) -> bool:
        """Update literal and brace state; return True if a test item was consumed."""
        consumed = False
        index = 0
        length = len(line)
        while index < length:
            if self._comment_depth:
                index = self._skip_block_comment(line, index)
                continue
            if self._string is not None:
                index = self._skip_string(line, index)
                continue

            char = line[index]
            following = line[index + 1] if index + 1 < length else ""
            if char == "/" and following == "/":
                break
            if char == "/" and following == "*":
                self._comment_depth = 1
                index += 2
            elif char == '"':
                self._string = ('"', True)
                index += 1
            elif char in "rb" and self._starts_raw_string(line, index):
                index = self._open_raw_string(line, index)
            elif char == "'":
                index = self._skip_char_literal(line, index)
            elif char == "{":
                if self._pending_test:
                    self._scopes.append(_Scope(open_depth=self._depth))
                    self._pending_test = False
                    consumed = True
                self._depth += 1
                index += 1
            elif char == "}":
                self._depth = max(0, self._depth - 1)
                if self._scopes and self._depth <= self._scopes[-1].open_depth:
                    self._scopes.pop()
                    consumed = True
                index += 1
            elif char in "([":
                self._nesting += 1
                index += 1
            elif char in ")]":
                self._nesting = max(0, self._nesting - 1)
                index += 1
            elif char == ";":
                if self._pending_test and self._nesting == 0:
                    self._pending_test = False
                    consumed = True
                index += 1
            else:
                index += 1
        return consumed

    def _skip_block_comment(self, line: str, index: int) -> int:
        while index < len(line):
            pair = line[index:index + 2]
            if pair == "/*":
                self._comment_depth += 1
                return index + 2
            if pair == "*/":
                self._comment_depth -= 1
                return index + 2
            index += 1
        return index

    def _skip_string(self, line: str, index: int) -> int:
        terminator, escapes = self._string or ('"', True)
        while index < len(line):
            if escapes and line[index] == "\\":
                index += 2
                continue
            if line.startswith(terminator, index):
                self._string = None
                return index + len(terminator)
            index += 1
        return index

    @staticmethod
    def _raw_prefix(line: str, index: int) -> Tuple[int, int]:
        """Return (position of the opening quote, hash count) or (-1, 0)."""
        if index > 0 and (line[index - 1].isalnum() or line[index - 1] == "_"):
            return -1, 0
        cursor = index
        if line[cursor] == "b":
            cursor += 1
        if cursor >= len(line) or line[cursor] != "r":
            return -1, 0
        cursor += 1
        hashes = 0
        while cursor < len(line) and line[cursor] == "#":
            hashes += 1
            cursor += 1
        if cursor < len(line) and line[cursor] == '"':
            return cursor, hashes
        return -1, 0

    def _starts_raw_string(self, line: str, index: int) -> bool:
        return self._raw_prefix(line, index)[0] >= 0

    def _open_raw_string(self, line: str, index: int) -> int:
        quote_pos, hashes = self._raw_prefix(line, index)
        self._string = ('"' + "#" * hashes, False)
        return quote_pos + 1

    @staticmethod
    def _skip_char_literal(line: str, index: int) -> int:
        following = line[index + 1] if index + 1 < len(line) else ""
        if following == "\\":
            end = line.find("'", index + 3)
            return end + 1 if end >= 0 else index + 1
        if index + 2 < len(line) and line[index + 2] == "'":
            return index + 3
        # Lifetime or label such as 'a.
        return index + 1


__all__ = [
    "RustRoleTracker",
    "classify_attribute",
    "infer_role",
    "line_roles",
    "uniform_role",
]
