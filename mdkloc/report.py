"""Progress metrics and the text report printed after a scan."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from .models import CodeRole, DirectoryStats, LanguageTotals, LineStats, ScanReport

DIR_WIDTH = 40
LANG_WIDTH = 16
RULE_WIDTH = 112


class PerformanceMetrics:
    """Counts processed files and lines and prints throughput."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        progress_enabled: Optional[bool] = None,
        clock=time.monotonic,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        if progress_enabled is None:
            isatty = getattr(self.stream, "isatty", None)
            progress_enabled = bool(isatty and isatty())
        self.progress_enabled = progress_enabled
        self._clock = clock
        self.start_time = clock()
        self.last_update = self.start_time
        self.files_processed = 0
        self.lines_processed = 0

    def update(self, lines: int) -> None:
        self.files_processed += 1
        self.lines_processed += lines
        now = self._clock()
        if now - self.last_update >= 1.0:
            self.print_progress()
            self.last_update = now

    def print_progress(self) -> None:
        if not self.progress_enabled:
            return
        elapsed = self._clock() - self.start_time
        self.stream.write(
            f"\rProcessed {self.files_processed} files "
            f"({safe_rate(self.files_processed, elapsed):.1f} files/sec) and "
            f"{self.lines_processed} lines "
            f"({safe_rate(self.lines_processed, elapsed):.1f} lines/sec)..."
        )
        self.stream.flush()

    def print_final_stats(self) -> None:
        elapsed = self._clock() - self.start_time
        print("\n\nPerformance Summary:", file=self.stream)
        print(f"Total time: {elapsed:.2f} seconds", file=self.stream)
        print(
            f"Files processed: {self.files_processed} "
            f"({safe_rate(self.files_processed, elapsed):.1f} files/sec)",
            file=self.stream,
        )
        print(
            f"Lines processed: {self.lines_processed} "
            f"({safe_rate(self.lines_processed, elapsed):.1f} lines/sec)",
            file=self.stream,
        )


def truncate_start(text: str, max_len: int) -> str:
    """Keep the tail of ``text``, prefixing ``...`` when it is too long."""
    if len(text) <= max_len:
        return text
    return "..." + text[len(text) - (max_len - 3):]


def safe_rate(value: int, elapsed: float) -> float:
    if elapsed <= sys.float_info.epsilon:
        return 0.0
    return value / elapsed


def safe_percentage(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


def format_language_stats_line(
    prefix: str, language: str, files: int, stats: LineStats
) -> str:
    return (
        f"{prefix:<{DIR_WIDTH}} {language:<{LANG_WIDTH}} {files:>8} {stats.code:>10} "
        f"{stats.comment:>10} {stats.overlap:>10} {stats.blank:>10}"
    )


def _header_line() -> str:
    return (
        f"{'Directory':<{DIR_WIDTH}} {'Language':<{LANG_WIDTH}} {'Files':>8} "
        f"{'Code':>10} {'Comments':>10} {'Mixed':>10} {'Blank':>10}"
    )


def display_directory(path: Path, current_dir: Path) -> str:
    try:
        relative = Path(path).relative_to(current_dir)
    except ValueError:
        return str(path)
    text = relative.as_posix()
    return "." if text in {"", "."} else text


def _sorted_directories(report: ScanReport) -> List[Path]:
    return sorted(report.directories, key=str)


def _table_rows(
    report: ScanReport, current_dir: Path, role: Optional[CodeRole] = None
) -> List[str]:
    rows: List[str] = []
    for directory in _sorted_directories(report):
        dir_stats: DirectoryStats = report.directories[directory]
        languages: Dict[str, LanguageTotals] = (
            dir_stats.languages if role is None else dir_stats.roles.get(role, {})
        )
        label = truncate_start(display_directory(directory, current_dir), DIR_WIDTH)
        for language in sorted(languages):
            totals = languages[language]
            rows.append(format_language_stats_line(label, language, totals.files, totals.stats))
    return rows


def _totals_rows(totals: Dict[str, LanguageTotals]) -> List[str]:
    return [
        format_language_stats_line("", language, totals[language].files, totals[language].stats)
        for language in sorted(totals)
    ]


def _role_section(report: ScanReport, current_dir: Path, role: CodeRole) -> List[str]:
    lines = [
        "",
        f"Role breakdown ({role.label})",
        "-" * RULE_WIDTH,
        _header_line(),
        "-" * RULE_WIDTH,
    ]
    rows = _table_rows(report, current_dir, role)
    if not rows:
        lines.append(f"No {role.label.lower()} data collected.")
        return lines
    lines.extend(rows)
    lines.append("-" * RULE_WIDTH)
    lines.append(f"Totals by language ({role.label}):")
    lines.extend(_totals_rows(report.totals_by_language(role)))
    return lines


def build_analysis_report(
    report: ScanReport,
    current_dir: Optional[Path] = None,
    *,
    role_breakdown: bool = False,
) -> str:
    """Render the detailed table, language totals and summary as text."""
    current_dir = Path.cwd() if current_dir is None else Path(current_dir)
    lines: List[str] = [
        "",
        "",
        "Detailed source code analysis:",
        "-" * RULE_WIDTH,
        _header_line(),
        "-" * RULE_WIDTH,
    ]
    lines.extend(_table_rows(report, current_dir))
    lines.append("-" * RULE_WIDTH)
    lines.append("Totals by language:")
    lines.extend(_totals_rows(report.totals_by_language()))

    if role_breakdown:
        for role in CodeRole:
            lines.extend(_role_section(report, current_dir, role))

    files = report.files_processed
    total_lines = report.lines_processed
    if files > 0 or total_lines > 0:
        grand = report.grand_total()
        lines.extend(
            [
                "",
                "Overall Summary:",
                f"Total files processed: {files}",
                f"Total lines processed: {total_lines}",
                f"Code lines:     {grand.code} ({safe_percentage(grand.code, total_lines):.1f}%)",
                f"Comment lines:  {grand.comment} "
                f"({safe_percentage(grand.comment, total_lines):.1f}%)",
                f"Mixed lines:    {grand.overlap} "
                f"({safe_percentage(grand.overlap, total_lines):.1f}%)",
                f"Blank lines:    {grand.blank} ({safe_percentage(grand.blank, total_lines):.1f}%)",
            ]
        )
        if report.error_count > 0:
            lines.extend(["", f"Warning: {report.error_count}"])
    return "\n".join(lines) + "\n"


def format_file_details(path: Path, stats: LineStats) -> str:
    return (
        f"File: {path}\n"
        f"  Code lines: {stats.code}\n"
        f"  Comment lines: {stats.comment}\n"
        f"  Blank lines: {stats.blank}\n"
        f"  Mixed code/comment lines: {stats.overlap}\n"
    )


def format_languages(languages: List[str]) -> str:
    lines = ["Supported languages:"]
    lines.extend(f"  {language}" for language in languages)
    return "\n".join(lines) + "\n"


__all__ = [
    "PerformanceMetrics",
    "build_analysis_report",
    "display_directory",
    "format_file_details",
    "format_language_stats_line",
    "format_languages",
    "safe_percentage",
    "safe_rate",
    "truncate_start",
]
