"""Map file names and extensions to a language label and scanner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .reader import first_nonempty_line
from .scanners.legacy import is_dcl_line

OTHER_LANGUAGE = "Other"


@dataclass(frozen=True)
class Dispatch:
    """Language label plus the id of the scanner that counts it."""

    language: str
    scanner_id: str


_FILENAME_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "makefile": ("Makefile", "makefile"),
    "gnumakefile": ("Makefile", "makefile"),
    "bsdmakefile": ("Makefile", "makefile"),
    "dockerfile": ("Dockerfile", "dockerfile"),
    "cmakelists.txt": ("CMake", "cmake"),
    ".bashrc": ("Shell", "shell"),
    ".bash_profile": ("Shell", "shell"),
    ".profile": ("Shell", "shell"),
    ".zshrc": ("Shell", "shell"),
    ".zprofile": ("Shell", "shell"),
    ".zshenv": ("Shell", "shell"),
    ".kshrc": ("Shell", "shell"),
    ".cshrc": ("Shell", "shell"),
}

_COMPOUND_EXTENSIONS: Dict[str, Tuple[str, str]] = {
    ".d.ts": ("TypeScript", "javascript"),
    ".tfvars.json": ("JSON", "json"),
}

_LANGUAGE_BY_EXTENSION: Dict[str, Tuple[str, str]] = {
    "rs": ("Rust", "rust"),
    "go": ("Go", "cstyle"),
    "py": ("Python", "python"),
    "java": ("Java", "cstyle"),
    "c": ("C/C++", "cstyle"),
    "h": ("C/C++", "cstyle"),
    "cpp": ("C/C++", "cstyle"),
    "hpp": ("C/C++", "cstyle"),
    "cc": ("C/C++", "cstyle"),
    "cxx": ("C/C++", "cstyle"),
    "hh": ("C/C++", "cstyle"),
    "cs": ("C#", "cstyle"),
    "scala": ("Scala", "cstyle"),
    "sbt": ("Scala", "cstyle"),
    "proto": ("Protobuf", "cstyle"),
    "dart": ("Dart", "cstyle"),
    "js": ("JavaScript", "javascript"),
    "mjs": ("JavaScript", "javascript"),
    "cjs": ("JavaScript", "javascript"),
    "ts": ("TypeScript", "javascript"),
    "jsx": ("JSX", "javascript"),
    "tsx": ("TSX", "javascript"),
    "php": ("PHP", "php"),
    "pl": ("Perl", "perl"),
    "pm": ("Perl", "perl"),
    "t": ("Perl", "perl"),
    "rb": ("Ruby", "ruby"),
    "sh": ("Shell", "shell"),
    "bash": ("Shell", "shell"),
    "zsh": ("Shell", "shell"),
    "ksh": ("Shell", "shell"),
    "pas": ("Pascal", "pascal"),
    "yaml": ("YAML", "yaml"),
    "yml": ("YAML", "yaml"),
    "json": ("JSON", "json"),
    "toml": ("TOML", "toml"),
    "ini": ("INI", "ini"),
    "cfg": ("INI", "ini"),
    "conf": ("INI", "ini"),
    "properties": ("INI", "ini"),
    "prop": ("INI", "ini"),
    "tfvars": ("INI", "ini"),
    "hcl": ("HCL", "hcl"),
    "tf": ("HCL", "hcl"),
    "mk": ("Makefile", "makefile"),
    "mak": ("Makefile", "makefile"),
    "dockerfile": ("Dockerfile", "dockerfile"),
    "cmake": ("CMake", "cmake"),
    "ps1": ("PowerShell", "powershell"),
    "psm1": ("PowerShell", "powershell"),
    "psd1": ("PowerShell", "powershell"),
    "bat": ("Batch", "batch"),
    "cmd": ("Batch", "batch"),
    "tcl": ("TCL", "tcl"),
    "rst": ("ReStructuredText", "rst"),
    "rest": ("ReStructuredText", "rst"),
    "vm": ("Velocity", "velocity"),
    "vtl": ("Velocity", "velocity"),
    "mustache": ("Mustache", "mustache"),
    "xml": ("XML", "xml"),
    "xsd": ("XML", "xml"),
    "html": ("HTML", "xml"),
    "htm": ("HTML", "xml"),
    "xhtml": ("HTML", "xml"),
    "svg": ("SVG", "xml"),
    "xsl": ("XSL", "xml"),
    "xslt": ("XSL", "xml"),
    "alg": ("Algol", "algol"),
    "algol": ("Algol", "algol"),
    "a60": ("Algol", "algol"),
    "a68": ("Algol", "algol"),
    "cob": ("COBOL", "cobol"),
    "cbl": ("COBOL", "cobol"),
    "cobol": ("COBOL", "cobol"),
    "cpy": ("COBOL", "cobol"),
    "f": ("Fortran", "fortran-fixed"),
    "for": ("Fortran", "fortran-fixed"),
    "f77": ("Fortran", "fortran-fixed"),
    "f90": ("Fortran", "fortran-free"),
    "f95": ("Fortran", "fortran-free"),
    "f03": ("Fortran", "fortran-free"),
    "f08": ("Fortran", "fortran-free"),
    "f18": ("Fortran", "fortran-free"),
    "asm": ("Assembly", "assembly"),
    "s": ("Assembly", "assembly"),
    "com": ("DCL", "dcl"),
    "ipl": ("IPLAN", "iplan"),
    "braw": ("MDHAVERS", "mdhavers"),
}

# Extensions whose language is only confirmed by looking at the content.
_SNIFFED_EXTENSIONS = {"com"}


def _split_extension(lower_name: str) -> Optional[str]:
    stem, dot, extension = lower_name.rpartition(".")
    if not dot or not stem or not extension:
        return None
    return extension


def _sniff(path: Path, extension: str) -> bool:
    if extension == "com":
        try:
            first = first_nonempty_line(path)
        except OSError:
            return False
        return first is not None and is_dcl_line(first)
    return True


def dispatch_name(file_name: str) -> Optional[Dispatch]:
    """Resolve a bare file name without touching the filesystem.

    Sniffed extensions resolve to their candidate language; ``dispatch`` confirms
    them against the file contents.
    """
    lower = file_name.lower()

    override = _FILENAME_OVERRIDES.get(lower)
    if override is None and lower.startswith("dockerfile."):
        override = _FILENAME_OVERRIDES["dockerfile"]
    if override is not None:
        return Dispatch(*override)

    for suffix, target in _COMPOUND_EXTENSIONS.items():
        if lower.endswith(suffix) and len(lower) > len(suffix):
            return Dispatch(*target)

    extension = _split_extension(lower)
    if extension is None:
        return None
    target = _LANGUAGE_BY_EXTENSION.get(extension)
    if target is None:
        return Dispatch(OTHER_LANGUAGE, "generic")
    return Dispatch(*target)


def dispatch(path: Path) -> Optional[Dispatch]:
    """Return the language and scanner for ``path`` or ``None`` to skip it."""
    path = Path(path)
    result = dispatch_name(path.name)
    if result is None:
        return None
    extension = _split_extension(path.name.lower())
    if extension in _SNIFFED_EXTENSIONS and result.scanner_id != "generic":
        if not _sniff(path, extension):
            return None
    return result


def supported_languages() -> List[str]:
    """Return the sorted, de-duplicated list of language labels."""
    labels = {label for label, _ in _LANGUAGE_BY_EXTENSION.values()}
    labels.update(label for label, _ in _FILENAME_OVERRIDES.values())
    labels.update(label for label, _ in _COMPOUND_EXTENSIONS.values())
    return sorted(labels)


__all__ = ["Dispatch", "OTHER_LANGUAGE", "dispatch", "dispatch_name", "supported_languages"]
