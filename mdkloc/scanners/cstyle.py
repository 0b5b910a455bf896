"""Scanners for languages with C-like ``//`` and ``/* */`` comments."""

from __future__ import annotations

from typing import Optional

from ..models import LineKind
from .base import CODE, COMMENT, DelimitedScanner

_C_BLOCK = ("/*", "*/")


class CStyleScanner(DelimitedScanner):
    """C, C++, Java, Go, C#, Scala, Protobuf and Dart."""

    line_markers = ("//",)
    blocks = (_C_BLOCK,)
    absorb_after_close = ("//",)


class RustScanner(CStyleScanner):
    """C-style comments where attribute lines always count as code.

    ``///`` and ``//!`` doc comments are plain line comments.
    """

    def line_override(self, trimmed: str) -> Optional[LineKind]:
        if trimmed.startswith(("#[", "#![")):
            return CODE
        return None


class JavaScriptScanner(DelimitedScanner):
    """JavaScript, TypeScript, JSX and TSX, including ``<!-- -->`` blocks.

    Regular expression literals are not tracked, so ``/*`` inside one is taken as
    a comment opener.
    """

    line_markers = ("//",)
    blocks = (_C_BLOCK, ("<!--", "-->"))
    absorb_after_close = ("//",)

    def accept_block_open(self, text: str, pos: int, opener: str) -> bool:
        if opener != "<!--":
            return True
        return pos == 0 or text[pos - 1].isspace()


class PhpScanner(DelimitedScanner):
    """C-style comments plus ``#`` shell-style line comments."""

    line_markers = ("//", "#")
    blocks = (_C_BLOCK,)
    absorb_after_close = ("//", "#")


class HclScanner(DelimitedScanner):
    """HCL and Terraform: ``#``, ``//`` and ``/* */``."""

    line_markers = ("#", "//")
    blocks = (_C_BLOCK,)
    absorb_after_close = ("//", "#")


class IplanScanner(DelimitedScanner):
    """PSS/E IPLAN: ``/* */`` blocks and whole-line ``!`` comments."""

    blocks = (_C_BLOCK,)
    absorb_after_close = ("!",)

    def line_override(self, trimmed: str) -> Optional[LineKind]:
        if trimmed.startswith("!"):
            return COMMENT
        return None


__all__ = [
    "CStyleScanner",
    "HclScanner",
    "IplanScanner",
    "JavaScriptScanner",
    "PhpScanner",
    "RustScanner",
]
