"""CLI entrypoint for the mdkloc source line counter."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path

from .config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    ConfigError,
    ScanOptions,
    load_config,
)
from .dispatch import supported_languages
from .logging import configure_logging, get_logger
from .models import FileCount
from .repo_scanner import EntryLimitExceeded, FilespecError, TreeScanner
from .report import (
    PerformanceMetrics,
    build_analysis_report,
    format_file_details,
    format_languages,
)

logger = get_logger("cli")


def _version() -> str:
    try:
        return metadata.version("mdkloc")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdkloc",
        description="Source code analyser for multiple programming languages.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="File or directory to analyse (defaults to current directory).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=[],
        help="Ignore files or directories matching this pattern (repeatable).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print per-file counts and debug logging.",
    )
    parser.add_argument(
        "-m",
        "--max-entries",
        type=int,
        default=None,
        help=f"Abort after this many files (default {DEFAULT_MAX_ENTRIES}).",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=int,
        default=None,
        help=f"Maximum directory depth to descend (default {DEFAULT_MAX_DEPTH}).",
    )
    parser.add_argument(
        "-n",
        "--non-recursive",
        action="store_true",
        default=None,
        help="Only analyse the top-level directory.",
    )
    parser.add_argument(
        "-f",
        "--filespec",
        default=None,
        help="Only count files whose name or relative path matches this glob.",
    )
    parser.add_argument(
        "-r",
        "--role-breakdown",
        action="store_true",
        default=None,
        help="Split totals into mainline and test code.",
    )
    parser.add_argument(
        "-l",
        "--languages",
        action="store_true",
        help="List supported languages and exit.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .mdkloc.yml file (defaults to the one in the analysed path).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_version()}",
    )
    return parser


def _resolve_options(args: argparse.Namespace) -> ScanOptions:
    if args.config:
        config_path = Path(args.config)
    else:
        target = Path(args.path).expanduser()
        config_path = target if target.is_dir() else target.parent
    options = load_config(config_path).to_options()

    options.ignore.extend(args.ignore)
    if args.filespec is not None:
        options.filespec = args.filespec
    if args.max_entries is not None:
        options.max_entries = args.max_entries
    if args.max_depth is not None:
        options.max_depth = args.max_depth
    if args.non_recursive:
        options.non_recursive = True
    if args.role_breakdown:
        options.role_breakdown = True
    options.verbose = bool(args.verbose)
    return options


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for mdkloc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.languages:
        sys.stdout.write(format_languages(supported_languages()))
        return

    print(f"mdkloc v{_version()}")
    if not Path(args.path).expanduser().exists():
        parser.exit(1, f"Path does not exist: {args.path}\n")

    try:
        options = _resolve_options(args)
    except ConfigError as exc:
        parser.exit(1, f"mdkloc: {exc}\n")

    def _print_file(file_count: FileCount) -> None:
        sys.stdout.write(format_file_details(file_count.path, file_count.stats))
        sys.stdout.write("\n")

    metrics = PerformanceMetrics()
    scanner = TreeScanner(
        options,
        progress=metrics,
        on_file=_print_file if options.verbose else None,
    )

    print("Starting source code analysis...")
    try:
        report = scanner.scan(args.path)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except FilespecError as exc:
        parser.exit(1, f"{exc}\n")
    except EntryLimitExceeded as exc:
        parser.exit(1, f"{exc}\n")

    logger.debug(
        "Scanned %d files with %d errors", report.files_processed, report.error_count
    )
    metrics.print_final_stats()
    sys.stdout.write(
        build_analysis_report(report, Path.cwd().resolve(), role_breakdown=options.role_breakdown)
    )


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
