"""Tests for mdkloc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdkloc.config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    ConfigError,
    MdklocConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MdklocConfig)
    assert config.root == tmp_path.resolve()
    assert config.ignore == []
    assert config.filespec is None

    options = config.to_options()
    assert options.max_entries == DEFAULT_MAX_ENTRIES
    assert options.max_depth == DEFAULT_MAX_DEPTH
    assert options.non_recursive is False
    assert options.role_breakdown is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".mdkloc.yml"
    config_file.write_text(
        """
ignore:
  - "vendor/"
  - "*.min.js"
filespec: "*.rs"
max_entries: 500
max_depth: 4
non_recursive: true
role_breakdown: yes
use_gitignore: true
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.ignore == ["vendor/", "*.min.js"]
    assert config.filespec == "*.rs"
    options = config.to_options()
    assert options.max_entries == 500
    assert options.max_depth == 4
    assert options.non_recursive is True
    assert options.role_breakdown is True
    assert options.use_gitignore is True


def test_load_config_accepts_single_ignore_string(tmp_path: Path) -> None:
    (tmp_path / ".mdkloc.yml").write_text("ignore: vendor\n", encoding="utf-8")

    assert load_config(tmp_path).ignore == ["vendor"]


def test_load_config_ignores_wrongly_typed_values(tmp_path: Path) -> None:
    (tmp_path / ".mdkloc.yml").write_text(
        "max_depth: deep\nnon_recursive: maybe\nfilespec: true\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.max_depth is None
    assert config.non_recursive is None
    assert config.filespec is None


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".mdkloc.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).ignore == []


def test_malformed_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".mdkloc.yml").write_text("ignore: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".mdkloc.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)
