"""Tests for ConfigFileLoader reading [tool.piranha-analyzers]."""

from pathlib import Path

import pytest

from piranha_analyzers.domain.exceptions import ConfigurationError
from piranha_analyzers.infrastructure.config_file_loader import ConfigFileLoader


def test_reads_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.piranha-analyzers]\ndisable = ["PA0001"]\njobs = 2\n'
    )
    assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"disable": ["PA0001"], "jobs": 2}


def test_searches_upward(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.piranha-analyzers]\nanalyze_generated = true\n")
    nested = tmp_path / "src" / "site"
    nested.mkdir(parents=True)
    assert ConfigFileLoader.load_config_from_fs(nested) == {"analyze_generated": True}


def test_nearest_file_wins_even_without_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.piranha-analyzers]\ndisable = ["PA0001"]\n')
    nested = tmp_path / "sub"
    nested.mkdir()
    (nested / "pyproject.toml").write_text('[project]\nname = "sub"\n')
    assert ConfigFileLoader.load_config_from_fs(nested) == {}


def test_invalid_toml_raises(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.piranha-analyzers\n")
    with pytest.raises(ConfigurationError):
        ConfigFileLoader.load_config_from_fs(tmp_path)


def test_section_must_be_a_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool]\npiranha-analyzers = "on"\n')
    with pytest.raises(ConfigurationError, match="must be a table"):
        ConfigFileLoader.load_config_from_fs(tmp_path)
