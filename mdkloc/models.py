"""Core data models shared across mdkloc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from pathlib import Path
from typing import Dict, Iterable, Optional


class LineKind(IntFlag):
    """Classification flags for one physical line."""

    NONE = 0
    BLANK = 1
    CODE = 2
    COMMENT = 4


class CodeRole(Enum):
    """Whether a line belongs to production code or to tests."""

    MAINLINE = "Mainline"
    TEST = "Test"

    @property
    def index(self) -> int:
        return 0 if self is CodeRole.MAINLINE else 1

    @property
    def label(self) -> str:
        return self.value


class FileRoleHint(Enum):
    """Path-level role decision taken before looking at file contents."""

    UNKNOWN = "unknown"
    TEST_FILE = "test"
    MAINLINE_FILE = "mainline"


@dataclass
class LineStats:
    """Code, comment and blank counters plus the mixed-line overlap."""

    code: int = 0
    comment: int = 0
    blank: int = 0
    overlap: int = 0

    @property
    def lines(self) -> int:
        return self.code + self.comment + self.blank - self.overlap

    def add_kind(self, kind: LineKind) -> None:
        has_code = bool(kind & LineKind.CODE)
        has_comment = bool(kind & LineKind.COMMENT)
        if kind & LineKind.BLANK:
            self.blank += 1
        if has_code:
            self.code += 1
        if has_comment:
            self.comment += 1
        if has_code and has_comment:
            self.overlap += 1

    def merge(self, other: "LineStats") -> None:
        self.code += other.code
        self.comment += other.comment
        self.blank += other.blank
        self.overlap += other.overlap

    def is_empty(self) -> bool:
        return not (self.code or self.comment or self.blank)

    @classmethod
    def from_kinds(cls, kinds: Iterable[LineKind]) -> "LineStats":
        stats = cls()
        for kind in kinds:
            stats.add_kind(kind)
        return stats


@dataclass
class CountResult:
    """Scanner output for one file: the triple and the reader's line count."""

    stats: LineStats
    total_lines: int


@dataclass
class FileCount:
    """Per-role statistics for a single counted file."""

    path: Path
    language: str
    total_lines: int
    roles: Dict[CodeRole, LineStats] = field(default_factory=dict)

    @property
    def stats(self) -> LineStats:
        combined = LineStats()
        for role_stats in self.roles.values():
            combined.merge(role_stats)
        return combined


@dataclass
class LanguageTotals:
    """Aggregated file count and line statistics for one language."""

    files: int = 0
    stats: LineStats = field(default_factory=LineStats)

    def add(self, stats: LineStats, files: int = 1) -> None:
        self.files += files
        self.stats.merge(stats)

    def merge(self, other: "LanguageTotals") -> None:
        self.add(other.stats, files=other.files)


@dataclass
class DirectoryStats:
    """Per-language totals for one directory, optionally split by role."""

    languages: Dict[str, LanguageTotals] = field(default_factory=dict)
    roles: Dict[CodeRole, Dict[str, LanguageTotals]] = field(default_factory=dict)

    def record(self, file_count: FileCount) -> None:
        self.languages.setdefault(file_count.language, LanguageTotals()).add(
            file_count.stats
        )
        for role, role_stats in file_count.roles.items():
            if role_stats.is_empty():
                continue
            bucket = self.roles.setdefault(role, {})
            bucket.setdefault(file_count.language, LanguageTotals()).add(role_stats)

    def merge(self, other: "DirectoryStats") -> None:
        for language, totals in other.languages.items():
            self.languages.setdefault(language, LanguageTotals()).merge(totals)
        for role, languages in other.roles.items():
            bucket = self.roles.setdefault(role, {})
            for language, totals in languages.items():
                bucket.setdefault(language, LanguageTotals()).merge(totals)


@dataclass
class ScanReport:
    """Result of walking a tree: per-directory stats and run counters."""

    root: Path
    directories: Dict[Path, DirectoryStats] = field(default_factory=dict)
    files_processed: int = 0
    lines_processed: int = 0
    error_count: int = 0

    def totals_by_language(
        self, role: Optional[CodeRole] = None
    ) -> Dict[str, LanguageTotals]:
        totals: Dict[str, LanguageTotals] = {}
        for dir_stats in self.directories.values():
            source = dir_stats.languages if role is None else dir_stats.roles.get(role, {})
            for language, language_totals in source.items():
                totals.setdefault(language, LanguageTotals()).merge(language_totals)
        return totals

    def grand_total(self) -> LineStats:
        total = LineStats()
        for language_totals in self.totals_by_language().values():
            total.merge(language_totals.stats)
        return total
