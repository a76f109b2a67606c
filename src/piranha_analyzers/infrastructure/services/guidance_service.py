"""GuidanceService: loads the packaged rule registry (titles, message templates, pylint ids)."""

import logging
from pathlib import Path
from typing import cast

import yaml

from piranha_analyzers.domain.protocols import GuidanceServiceProtocol
from piranha_analyzers.domain.registry_types import RuleRegistryEntry
from piranha_analyzers.domain.rule_msgs import RuleMsgBuilder

logger = logging.getLogger(__name__)


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and exposes it to the rules and the checker."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            logger.warning("Rule registry not found at %s", self._path)
            self._registry = {}
            return
        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self._registry = (
            cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
        )

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_code: str) -> RuleRegistryEntry | None:
        """Registry entry by rule id, symbol or pylint message id."""
        return RuleMsgBuilder.get_entry(self._registry, rule_code)
