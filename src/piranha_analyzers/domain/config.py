"""Configuration wrapper for the [tool.piranha-analyzers] section."""

import logging

from piranha_analyzers.domain.constants import ALL_RULE_IDS
from piranha_analyzers.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """
    Holds the analyzer configuration loaded from pyproject.toml.

    Built at the composition root from the dict returned by ConfigFileLoader;
    no file I/O happens here.
    """

    def __init__(self, config: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = dict(config or {})
        self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Raise ConfigurationError for values the analyzer cannot honour."""
        disable = config.get("disable", [])
        if not isinstance(disable, (list, tuple, set)):
            raise ConfigurationError("'disable' must be a list of rule ids")
        unknown = sorted(str(code) for code in disable if code not in ALL_RULE_IDS)
        if unknown:
            raise ConfigurationError(
                f"Unknown rule id(s) in 'disable': {', '.join(unknown)}"
            )

        analyze_generated = config.get("analyze_generated", False)
        if not isinstance(analyze_generated, bool):
            raise ConfigurationError("'analyze_generated' must be a boolean")

        jobs = config.get("jobs", 1)
        if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs < 1:
            raise ConfigurationError("'jobs' must be a positive integer")

        known = {"disable", "analyze_generated", "jobs"}
        for key in sorted(set(config) - known):
            logger.warning("Ignoring unknown configuration key %r", key)

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def disabled_rules(self) -> frozenset[str]:
        raw = self._config.get("disable", [])
        if not isinstance(raw, (list, tuple, set)):
            return frozenset()
        return frozenset(str(code) for code in raw)

    def is_rule_enabled(self, rule_id: str, enabled_by_default: bool = True) -> bool:
        return enabled_by_default and rule_id not in self.disabled_rules

    @property
    def analyze_generated(self) -> bool:
        return bool(self._config.get("analyze_generated", False))

    @property
    def jobs(self) -> int:
        raw = self._config.get("jobs", 1)
        return raw if isinstance(raw, int) and raw > 0 else 1
