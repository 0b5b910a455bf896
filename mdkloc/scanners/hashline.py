"""Scanners for formats with whole-line comments only."""

from __future__ import annotations

from .base import LinePrefixScanner


class BatchScanner(LinePrefixScanner):
    """Windows batch files: ``REM`` (any case) or ``::`` start a comment."""

    def __init__(self) -> None:
        super().__init__(("::",))

    def is_comment(self, trimmed: str) -> bool:
        if trimmed.startswith("::"):
            return True
        first_token = trimmed.split(None, 1)[0]
        return first_token.upper() == "REM"


def hash_scanner(*, shebang_is_code: bool = False) -> LinePrefixScanner:
    """``#`` comments (YAML, TOML, Makefile, Dockerfile, CMake, MDHAVERS)."""
    return LinePrefixScanner(("#",), shebang_is_code=shebang_is_code)


def ini_scanner() -> LinePrefixScanner:
    return LinePrefixScanner(("#", ";"))


def assembly_scanner() -> LinePrefixScanner:
    return LinePrefixScanner((";", "#", "//"))


__all__ = ["BatchScanner", "assembly_scanner", "hash_scanner", "ini_scanner"]
