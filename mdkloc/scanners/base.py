"""Base classes for per-language line scanners."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from ..models import CountResult, LineKind, LineStats

BLANK = LineKind.BLANK
CODE = LineKind.CODE
COMMENT = LineKind.COMMENT
MIXED = LineKind.CODE | LineKind.COMMENT


class Scanner(ABC):
    """Contract for scanners that classify the lines of one file."""

    @abstractmethod
    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        """Yield one ``LineKind`` per input line, in order."""

    def scan(self, lines: Iterable[str]) -> CountResult:
        """Return the raw triple and line count for ``lines``."""
        stats = LineStats()
        total = 0
        for kind in self.classify(lines):
            stats.add_kind(kind)
            total += 1
        return CountResult(stats=stats, total_lines=total)


class GenericScanner(Scanner):
    """Non-blank lines are code; nothing is ever a comment."""

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        for line in lines:
            yield CODE if line.strip() else BLANK


class LinePrefixScanner(Scanner):
    """Whole-line comments introduced by one of ``prefixes``.

    Markers after code on the same line are ignored: the line stays code.
    """

    def __init__(self, prefixes: Sequence[str], *, shebang_is_code: bool = False) -> None:
        self.prefixes = tuple(prefixes)
        self.shebang_is_code = shebang_is_code

    def is_comment(self, trimmed: str) -> bool:
        return trimmed.startswith(self.prefixes)

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        for number, line in enumerate(lines, start=1):
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
            elif number == 1 and self.shebang_is_code and trimmed.startswith("#!"):
                yield CODE
            elif self.is_comment(trimmed):
                yield COMMENT
            else:
                yield CODE


class DelimitedScanner(Scanner):
    """Line comments plus block comments that may span lines.

    The engine walks each line left to right. Outside a block it looks for the
    earliest line marker or block opener; code before a marker makes the line mixed.
    After a block closes, the remainder is examined again unless it starts with one
    of ``absorb_after_close``, in which case it stays part of the comment.
    """

    line_markers: Tuple[str, ...] = ()
    blocks: Tuple[Tuple[str, str], ...] = ()
    absorb_after_close: Tuple[str, ...] = ()

    def __init__(
        self,
        line_markers: Sequence[str] | None = None,
        blocks: Sequence[Tuple[str, str]] | None = None,
        absorb_after_close: Sequence[str] | None = None,
    ) -> None:
        if line_markers is not None:
            self.line_markers = tuple(line_markers)
        if blocks is not None:
            self.blocks = tuple(blocks)
        if absorb_after_close is not None:
            self.absorb_after_close = tuple(absorb_after_close)

    def accept_block_open(self, text: str, pos: int, opener: str) -> bool:
        """Hook for scanners that only honor an opener in some positions."""
        return True

    def line_override(self, trimmed: str) -> Optional[LineKind]:
        """Hook to classify a whole line before comment markers are considered."""
        return None

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        closer: Optional[str] = None
        for line in lines:
            if not line.strip():
                yield BLANK
                continue
            if closer is None:
                override = self.line_override(line.strip())
                if override is not None:
                    yield override
                    continue
            kind, closer = self._classify_line(line, closer)
            yield kind

    def _classify_line(
        self, text: str, closer: Optional[str]
    ) -> Tuple[LineKind, Optional[str]]:
        kind = LineKind.NONE
        while text:
            if closer is not None:
                kind |= COMMENT
                end = text.find(closer)
                if end < 0:
                    return kind, closer
                text = text[end + len(closer):]
                closer = None
                rest = text.strip()
                if not rest:
                    return kind, None
                if self.absorb_after_close and rest.startswith(self.absorb_after_close):
                    return kind, None
                continue

            marker_pos, block = self._next_marker(text)
            if marker_pos < 0:
                if text.strip():
                    kind |= CODE
                return kind, None

            if text[:marker_pos].strip():
                kind |= CODE
            kind |= COMMENT
            if block is None:
                return kind, None
            opener, closer = block
            text = text[marker_pos + len(opener):]
        return kind, closer

    def _next_marker(self, text: str) -> Tuple[int, Optional[Tuple[str, str]]]:
        best_pos = -1
        best_block: Optional[Tuple[str, str]] = None
        for opener, closer in self.blocks:
            pos = self._find_opener(text, opener)
            if pos >= 0 and (best_pos < 0 or pos < best_pos):
                best_pos, best_block = pos, (opener, closer)
        for marker in self.line_markers:
            pos = text.find(marker)
            if pos >= 0 and (best_pos < 0 or pos < best_pos):
                best_pos, best_block = pos, None
        return best_pos, best_block

    def _find_opener(self, text: str, opener: str) -> int:
        start = 0
        while True:
            pos = text.find(opener, start)
            if pos < 0 or self.accept_block_open(text, pos, opener):
                return pos
            start = pos + 1


__all__ = [
    "BLANK",
    "CODE",
    "COMMENT",
    "MIXED",
    "DelimitedScanner",
    "GenericScanner",
    "LinePrefixScanner",
    "Scanner",
]
