"""Perl and Ruby scanners with their documentation block forms."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from ..models import LineKind
from .base import BLANK, CODE, COMMENT, Scanner

_POD_COMMAND = re.compile(r"^=[A-Za-z]")


def _hash_line_kind(trimmed: str, number: int) -> LineKind:
    if trimmed.startswith("#"):
        if number == 1 and trimmed.startswith("#!"):
            return CODE
        return COMMENT
    return CODE


class PerlScanner(Scanner):
    """``#`` comments and POD regions from ``=pod``/``=head...`` to ``=cut``."""

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        in_pod = False
        for number, line in enumerate(lines, start=1):
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
            elif trimmed.startswith("=cut"):
                in_pod = False
                yield COMMENT
            elif in_pod:
                yield COMMENT
            elif _POD_COMMAND.match(trimmed):
                in_pod = True
                yield COMMENT
            else:
                yield _hash_line_kind(trimmed, number)


def _is_marker(trimmed: str, marker: str) -> bool:
    return trimmed == marker or trimmed.startswith(marker + " ")


class RubyScanner(Scanner):
    """``#`` comments and ``=begin``/``=end`` blocks."""

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        in_block = False
        for number, line in enumerate(lines, start=1):
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
            elif in_block:
                if _is_marker(trimmed, "=end"):
                    in_block = False
                yield COMMENT
            elif _is_marker(trimmed, "=begin"):
                in_block = True
                yield COMMENT
            else:
                yield _hash_line_kind(trimmed, number)


__all__ = ["PerlScanner", "RubyScanner"]
