"""Configuration loading for mdkloc (.mdkloc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".mdkloc.yml"

DEFAULT_MAX_ENTRIES = 1_000_000
DEFAULT_MAX_DEPTH = 100


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanOptions:
    """Traversal and reporting settings shared by the CLI and the walker."""

    ignore: List[str] = field(default_factory=list)
    filespec: Optional[str] = None
    max_entries: int = DEFAULT_MAX_ENTRIES
    max_depth: int = DEFAULT_MAX_DEPTH
    non_recursive: bool = False
    role_breakdown: bool = False
    use_gitignore: bool = False
    verbose: bool = False


@dataclass
class MdklocConfig:
    """Represents the settings defined in .mdkloc.yml."""

    root: Path
    ignore: List[str] = field(default_factory=list)
    filespec: Optional[str] = None
    max_entries: Optional[int] = None
    max_depth: Optional[int] = None
    non_recursive: Optional[bool] = None
    role_breakdown: Optional[bool] = None
    use_gitignore: Optional[bool] = None

    def to_options(self) -> ScanOptions:
        options = ScanOptions(ignore=list(self.ignore), filespec=self.filespec)
        if self.max_entries is not None:
            options.max_entries = self.max_entries
        if self.max_depth is not None:
            options.max_depth = self.max_depth
        if self.non_recursive is not None:
            options.non_recursive = self.non_recursive
        if self.role_breakdown is not None:
            options.role_breakdown = self.role_breakdown
        if self.use_gitignore is not None:
            options.use_gitignore = self.use_gitignore
        return options


def load_config(config_path: Path) -> MdklocConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MdklocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    return MdklocConfig(
        root=root,
        ignore=_as_str_list(data.get("ignore")),
        filespec=_as_str(data.get("filespec")),
        max_entries=_as_int(data.get("max_entries")),
        max_depth=_as_int(data.get("max_depth")),
        non_recursive=_as_bool(data.get("non_recursive")),
        role_breakdown=_as_bool(data.get("role_breakdown")),
        use_gitignore=_as_bool(data.get("use_gitignore")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix in {".yml", ".yaml"}:
        return config_path.resolve()
    return (config_path.parent / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "MdklocConfig",
    "ScanOptions",
    "load_config",
]
