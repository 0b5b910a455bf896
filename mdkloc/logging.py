"""Logger hierarchy for the traversal and CLI layers.

Per-entry problems found while walking a tree (unreadable directories, metadata
failures, depth overruns) are reported through these loggers on stderr so that the
report on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_ROOT = "mdkloc"
_FORMAT = "[mdkloc] %(levelname)s %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``mdkloc`` or the ``mdkloc.<name>`` child logger."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(
    *, verbose: bool = False, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Send mdkloc records to ``stream`` (stderr by default).

    Warnings and errors are always shown; ``verbose`` also enables DEBUG records.
    Calling this again replaces the previous handler.
    """
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    return root


__all__ = ["configure_logging", "get_logger"]
