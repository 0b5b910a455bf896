"""Tests for mdkloc.normalize."""

from __future__ import annotations

import pytest

from mdkloc.models import LineStats
from mdkloc.normalize import check_invariants, normalize_stats


def test_matching_sum_is_unchanged() -> None:
    stats = LineStats(code=2, comment=1, blank=1)

    assert normalize_stats(stats, 4) == stats


def test_excess_is_taken_from_blank_first() -> None:
    result = normalize_stats(LineStats(code=2, comment=2, blank=1), 4)

    assert (result.code, result.comment, result.blank, result.overlap) == (2, 2, 0, 0)


def test_remaining_excess_becomes_overlap() -> None:
    result = normalize_stats(LineStats(code=3, comment=2, blank=0), 4)

    assert result.overlap == 1
    assert result.lines == 4


def test_deficit_is_credited_to_blank() -> None:
    result = normalize_stats(LineStats(code=1), 3)

    assert result.blank == 2


def test_empty_inputs_are_returned_unchanged() -> None:
    assert normalize_stats(LineStats(), 5) == LineStats()
    assert normalize_stats(LineStats(code=1), 0) == LineStats(code=1)


def test_normalize_is_idempotent() -> None:
    once = normalize_stats(LineStats(code=3, comment=3, blank=2), 5)

    assert normalize_stats(once, 5) == once


def test_normalize_does_not_mutate_input() -> None:
    stats = LineStats(code=1)
    normalize_stats(stats, 3)

    assert stats.blank == 0


def test_check_invariants_rejects_mismatch() -> None:
    with pytest.raises(AssertionError):
        check_invariants(LineStats(code=2), 3)
