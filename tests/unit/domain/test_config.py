"""Unit tests for ConfigurationLoader validation and accessors."""

import unittest

import pytest

from piranha_analyzers.domain.config import ConfigurationLoader
from piranha_analyzers.domain.exceptions import ConfigurationError, PiranhaAnalyzerError


class TestConfigurationLoader(unittest.TestCase):
    def test_defaults(self) -> None:
        loader = ConfigurationLoader()
        assert loader.disabled_rules == frozenset()
        assert loader.analyze_generated is False
        assert loader.jobs == 1
        assert loader.is_rule_enabled("PA0001")
        assert loader.is_rule_enabled("PA0002")

    def test_disable(self) -> None:
        loader = ConfigurationLoader({"disable": ["PA0001"]})
        assert not loader.is_rule_enabled("PA0001")
        assert loader.is_rule_enabled("PA0002")

    def test_rule_disabled_by_default_stays_disabled(self) -> None:
        assert not ConfigurationLoader().is_rule_enabled("PA0001", enabled_by_default=False)

    def test_values_are_read(self) -> None:
        loader = ConfigurationLoader({"analyze_generated": True, "jobs": 4})
        assert loader.analyze_generated is True
        assert loader.jobs == 4

    def test_unknown_rule_id_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="PA9999"):
            ConfigurationLoader({"disable": ["PA9999"]})

    def test_disable_must_be_a_list(self) -> None:
        with pytest.raises(ConfigurationError):
            ConfigurationLoader({"disable": "PA0001"})

    def test_analyze_generated_must_be_bool(self) -> None:
        with pytest.raises(ConfigurationError):
            ConfigurationLoader({"analyze_generated": "yes"})

    def test_jobs_must_be_positive_int(self) -> None:
        for bad in (0, -1, "2", True, 1.5):
            with pytest.raises(ConfigurationError):
                ConfigurationLoader({"jobs": bad})

    def test_configuration_error_is_analyzer_error(self) -> None:
        assert issubclass(ConfigurationError, PiranhaAnalyzerError)

    def test_unknown_keys_are_logged_not_fatal(self) -> None:
        with self.assertLogs("piranha_analyzers.domain.config", level="WARNING") as logs:
            loader = ConfigurationLoader({"colour": "blue"})
        assert loader.config == {"colour": "blue"}
        assert any("colour" in line for line in logs.output)
