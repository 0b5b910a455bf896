"""Per-language scanner implementations and the scanner registry."""

from __future__ import annotations

from typing import Dict

from .base import DelimitedScanner, GenericScanner, LinePrefixScanner, Scanner
from .cstyle import (
    CStyleScanner,
    HclScanner,
    IplanScanner,
    JavaScriptScanner,
    PhpScanner,
    RustScanner,
)
from .hashline import BatchScanner, assembly_scanner, hash_scanner, ini_scanner
from .legacy import (
    AlgolScanner,
    CobolScanner,
    DclScanner,
    FortranScanner,
    PascalScanner,
)
from .markup import MustacheScanner, PowerShellScanner, VelocityScanner, XmlScanner
from .python import PythonScanner
from .scripts import PerlScanner, RubyScanner

_BUILTIN_SCANNERS: Dict[str, Scanner] = {
    "generic": GenericScanner(),
    "rust": RustScanner(),
    "cstyle": CStyleScanner(),
    "python": PythonScanner(),
    "javascript": JavaScriptScanner(),
    "php": PhpScanner(),
    "perl": PerlScanner(),
    "ruby": RubyScanner(),
    "shell": hash_scanner(shebang_is_code=True),
    "pascal": PascalScanner(),
    "yaml": hash_scanner(),
    "toml": hash_scanner(),
    "json": GenericScanner(),
    "ini": ini_scanner(),
    "hcl": HclScanner(),
    "makefile": hash_scanner(),
    "dockerfile": hash_scanner(),
    "cmake": hash_scanner(),
    "powershell": PowerShellScanner(),
    "batch": BatchScanner(),
    "tcl": hash_scanner(shebang_is_code=True),
    "rst": GenericScanner(),
    "velocity": VelocityScanner(),
    "mustache": MustacheScanner(),
    "xml": XmlScanner(),
    "algol": AlgolScanner(),
    "cobol": CobolScanner(),
    "fortran-fixed": FortranScanner(fixed_form=True),
    "fortran-free": FortranScanner(fixed_form=False),
    "assembly": assembly_scanner(),
    "dcl": DclScanner(),
    "iplan": IplanScanner(),
    "mdhavers": hash_scanner(),
}


def get_scanner(scanner_id: str) -> Scanner:
    """Return the scanner registered under ``scanner_id``."""
    try:
        return _BUILTIN_SCANNERS[scanner_id]
    except KeyError:
        raise ValueError(f"Unknown scanner: {scanner_id}") from None


def scanner_ids() -> list[str]:
    return sorted(_BUILTIN_SCANNERS)


__all__ = [
    "DelimitedScanner",
    "GenericScanner",
    "LinePrefixScanner",
    "Scanner",
    "get_scanner",
    "scanner_ids",
]
