"""Scanners for Pascal and the fixed-column and legacy formats."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Tuple

from ..models import LineKind
from .base import BLANK, CODE, COMMENT, MIXED, Scanner

_CO_CLOSER = re.compile(r"\bco\b")


def _tail_kind(after: str, *, line_marker: str = "//") -> LineKind:
    tail = after.strip()
    if tail and not tail.startswith(line_marker):
        return MIXED
    return COMMENT


class PascalScanner(Scanner):
    """``{ }`` and ``(* *)`` comments, each with its own nesting depth.

    Both depths are updated from every opener and closer on every line, so
    ``{ { x } } y`` closes both levels and leaves ``y`` as code, and a brace
    opened after a closed ``(* *)`` on the same line stays open. Whole-line ``//``
    comments are supported.
    """

    _PAIRS: Tuple[Tuple[str, str], ...] = (("{", "}"), ("(*", "*)"))
    _INNERMOST = (
        re.compile(r"\{[^{}]*\}"),
        re.compile(r"\(\*(?:(?!\(\*|\*\)).)*\*\)"),
    )

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        depths = [0, 0]
        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
                continue

            was_open = any(depths)
            prefix = ""
            text = trimmed
            if not was_open:
                if trimmed.startswith("//"):
                    yield COMMENT
                    continue
                pos = self._first_opener(trimmed)
                if pos < 0:
                    yield CODE
                    continue
                prefix, text = trimmed[:pos], trimmed[pos:]

            tail_start = 0
            for index, (opener, closer) in enumerate(self._PAIRS):
                before = depths[index]
                depths[index] = max(0, before + text.count(opener) - text.count(closer))
                if before and not depths[index]:
                    tail_start = max(tail_start, text.rfind(closer) + len(closer))

            kind = COMMENT
            if any(depths):
                if prefix.strip():
                    kind |= CODE
            elif was_open:
                kind |= self._residual_kind(text[tail_start:])
            else:
                kind |= self._residual_kind(trimmed)
            yield kind

    def _first_opener(self, trimmed: str) -> int:
        positions = [trimmed.find(opener) for opener, _closer in self._PAIRS]
        found = [pos for pos in positions if pos >= 0]
        return min(found) if found else -1

    def _residual_kind(self, text: str) -> LineKind:
        """Return CODE when anything but comments is left in ``text``."""
        previous = None
        while previous != text:
            previous = text
            for pattern in self._INNERMOST:
                text = pattern.sub(" ", text)
        for _opener, closer in self._PAIRS:
            text = text.replace(closer, " ")
        rest = text.strip()
        if rest and not rest.startswith("//"):
            return CODE
        return LineKind.NONE


class AlgolScanner(Scanner):
    """ALGOL ``COMMENT ... ;`` statements, ``co ... co`` and ``#`` comments."""

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        in_comment = False
        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
                continue
            lower = trimmed.lower()

            if in_comment:
                end = lower.find(";")
                if end < 0:
                    yield COMMENT
                    continue
                in_comment = False
                yield _tail_kind(trimmed[end + 1:], line_marker="#")
                continue

            if lower.startswith("comment"):
                end = lower.find(";")
                if end < 0:
                    in_comment = True
                    yield COMMENT
                else:
                    yield _tail_kind(trimmed[end + 1:], line_marker="#")
                continue

            closing = _CO_CLOSER.search(lower, 3) if lower.startswith("co ") else None
            if closing is not None:
                yield _tail_kind(trimmed[closing.end():], line_marker="#")
                continue

            if lower.startswith("#"):
                yield COMMENT
                continue
            yield CODE


class CobolScanner(Scanner):
    """Fixed-format column 7 indicators plus free-format ``*>`` comments."""

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        for line in lines:
            if not line.strip():
                yield BLANK
                continue
            if line.lstrip().startswith("*>"):
                yield COMMENT
                continue
            if len(line) >= 7 and line[6] in "*/":
                yield COMMENT
                continue
            yield MIXED if "*>" in line else CODE


class FortranScanner(Scanner):
    """Fixed-form column 1 comments or free-form ``!`` comments.

    In both forms a ``!`` after code makes the line mixed.
    """

    _FIXED_INDICATORS = "Cc*Dd!"

    def __init__(self, *, fixed_form: bool) -> None:
        self.fixed_form = fixed_form

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
            elif self.fixed_form and line[0] in self._FIXED_INDICATORS:
                yield COMMENT
            elif trimmed.startswith("!"):
                yield COMMENT
            elif "!" in trimmed:
                yield MIXED
            else:
                yield CODE


def is_dcl_line(line: str) -> bool:
    """Return True when ``line`` looks like the start of a DCL procedure."""
    return line.lstrip().startswith(("$", "!"))


class DclScanner(Scanner):
    """OpenVMS DCL command procedures.

    The first non-empty line must start with ``$`` or ``!``; otherwise no line is
    classified and the file contributes nothing.
    """

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        buffered: List[str] = list(lines)
        first = next((line for line in buffered if line.strip()), None)
        if first is not None and not is_dcl_line(first):
            for _line in buffered:
                yield LineKind.NONE
            return

        for line in buffered:
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
            elif trimmed.startswith("!"):
                yield COMMENT
            elif trimmed.startswith("$") and trimmed[1:].lstrip().startswith("!"):
                yield COMMENT
            else:
                yield CODE


__all__ = [
    "AlgolScanner",
    "CobolScanner",
    "DclScanner",
    "FortranScanner",
    "PascalScanner",
    "is_dcl_line",
]
