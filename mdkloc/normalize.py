"""Reconcile scanner output with the reader's physical line count."""

from __future__ import annotations

from dataclasses import replace

from .models import LineStats


def normalize_stats(stats: LineStats, total_lines: int) -> LineStats:
    """Return a copy of ``stats`` whose line sum matches ``total_lines``.

    Excess lines are taken out of ``blank`` first and the remainder is recorded as
    overlap; a deficit is credited to ``blank``. Empty input and empty files are
    returned unchanged.
    """
    result = replace(stats)
    if total_lines == 0 or result.is_empty():
        return result

    current = result.lines
    if current > total_lines:
        excess = current - total_lines
        reduce_blank = min(result.blank, excess)
        result.blank -= reduce_blank
        result.overlap += excess - reduce_blank
    elif current < total_lines:
        result.blank += total_lines - current

    check_invariants(result, total_lines)
    return result


def check_invariants(stats: LineStats, total_lines: int) -> None:
    """Raise ``AssertionError`` when normalized stats are inconsistent."""
    if min(stats.code, stats.comment, stats.blank, stats.overlap) < 0:
        raise AssertionError(f"negative line counter in {stats}")
    if stats.lines != total_lines:
        raise AssertionError(
            f"line sum {stats.lines} does not match total {total_lines} for {stats}"
        )


__all__ = ["check_invariants", "normalize_stats"]
