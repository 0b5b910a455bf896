"""Line reading that tolerates invalid UTF-8 and mixed line endings."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator, List

_CHUNK_SIZE = 64 * 1024


def iter_lossy_lines(stream: BinaryIO) -> Iterator[str]:
    """Yield decoded lines from a byte stream without their terminators.

    Invalid UTF-8 is replaced with U+FFFD, both ``\\n`` and ``\\r\\n`` endings are
    accepted and a missing final newline still yields the last line.
    """
    for raw in stream:
        text = raw.decode("utf-8", errors="replace")
        yield text.rstrip("\r\n")


def read_lines(path: Path) -> List[str]:
    """Return all lines of ``path``; read errors propagate as ``OSError``."""
    with Path(path).open("rb", buffering=_CHUNK_SIZE) as handle:
        return list(iter_lossy_lines(handle))


def first_nonempty_line(path: Path) -> str | None:
    """Return the first line of ``path`` that is not whitespace only."""
    with Path(path).open("rb", buffering=_CHUNK_SIZE) as handle:
        for line in iter_lossy_lines(handle):
            if line.strip():
                return line
    return None


__all__ = ["first_nonempty_line", "iter_lossy_lines", "read_lines"]
