"""Count one file: dispatch, scan, normalize and split by role."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .dispatch import Dispatch, dispatch
from .models import CodeRole, CountResult, FileCount, FileRoleHint, LineStats
from .normalize import normalize_stats
from .reader import read_lines
from .roles import infer_role, line_roles, uniform_role
from .scanners import get_scanner


def count_lines(path: Path, target: Optional[Dispatch] = None) -> Optional[CountResult]:
    """Return the normalized triple for ``path``, or ``None`` when it is skipped."""
    target = target or dispatch(path)
    if target is None:
        return None
    raw = get_scanner(target.scanner_id).scan(read_lines(path))
    return CountResult(
        stats=normalize_stats(raw.stats, raw.total_lines), total_lines=raw.total_lines
    )


def count_file(
    path: Path,
    root: Optional[Path] = None,
    hint: Optional[FileRoleHint] = None,
) -> Optional[FileCount]:
    """Count ``path`` and attribute every line to a role.

    Returns ``None`` when the dispatcher skips the file. Read errors propagate as
    ``OSError``.
    """
    path = Path(path)
    target = dispatch(path)
    if target is None:
        return None

    lines = read_lines(path)
    if hint is None:
        hint = infer_role(root, path)
    roles = line_roles(path, lines, hint)
    scanner = get_scanner(target.scanner_id)

    buckets: Dict[CodeRole, LineStats] = {}
    role_lines: Dict[CodeRole, int] = {}
    for kind, role in zip(scanner.classify(lines), roles):
        buckets.setdefault(role, LineStats()).add_kind(kind)
        role_lines[role] = role_lines.get(role, 0) + 1

    if not buckets:
        buckets[uniform_role(hint)] = LineStats()

    normalized = {
        role: normalize_stats(stats, role_lines.get(role, 0))
        for role, stats in buckets.items()
    }
    return FileCount(
        path=path,
        language=target.language,
        total_lines=len(lines),
        roles=normalized,
    )


__all__ = ["count_file", "count_lines"]
