"""Markup and template scanners built on the delimiter engine."""

from __future__ import annotations

from .base import DelimitedScanner


class XmlScanner(DelimitedScanner):
    """XML, HTML, SVG and XSL ``<!-- -->`` comments."""

    blocks = (("<!--", "-->"),)


class VelocityScanner(DelimitedScanner):
    """Velocity templates: ``##`` line comments and ``#* *#`` blocks."""

    line_markers = ("##",)
    blocks = (("#*", "*#"),)
    absorb_after_close = ("##",)


class MustacheScanner(DelimitedScanner):
    """Mustache ``{{! }}`` comments, which may span lines."""

    blocks = (("{{!", "}}"),)


class PowerShellScanner(DelimitedScanner):
    """PowerShell ``#`` line comments and ``<# #>`` block comments."""

    line_markers = ("#",)
    blocks = (("<#", "#>"),)


__all__ = ["MustacheScanner", "PowerShellScanner", "VelocityScanner", "XmlScanner"]
