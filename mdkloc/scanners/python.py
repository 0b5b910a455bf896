"""Python scanner: ``#`` comments and docstring-style triple-quoted strings."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from ..models import LineKind
from .base import BLANK, CODE, COMMENT, MIXED, Scanner

_TRIPLE_QUOTES = ('"""', "'''")


def _trailing_kind(after: str) -> LineKind:
    tail = after.strip()
    if tail and not tail.startswith("#"):
        return MIXED
    return COMMENT


class PythonScanner(Scanner):
    """Treats triple-quoted strings that start a line as comments.

    A triple quote only opens a docstring when the previous code line did not end
    with a backslash continuation.
    """

    def classify(self, lines: Iterable[str]) -> Iterator[LineKind]:
        open_quote: Optional[str] = None
        # Refreshed on code lines only: a comment or blank line after a trailing
        # backslash keeps the next triple quote from opening a docstring.
        continued = False
        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                yield BLANK
                continue

            if open_quote is not None:
                end = trimmed.find(open_quote)
                if end < 0:
                    yield COMMENT
                    continue
                yield _trailing_kind(trimmed[end + 3:])
                open_quote = None
                continue

            if trimmed.startswith("#"):
                yield COMMENT
                continue

            if not continued and trimmed.startswith(_TRIPLE_QUOTES):
                quote = trimmed[:3]
                end = trimmed.find(quote, 3)
                if end < 0:
                    open_quote = quote
                    yield COMMENT
                else:
                    yield _trailing_kind(trimmed[end + 3:])
                continue

            continued = trimmed.endswith("\\")
            yield CODE


__all__ = ["PythonScanner"]
