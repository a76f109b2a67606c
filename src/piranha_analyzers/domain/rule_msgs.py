"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import cast

from piranha_analyzers.domain.constants import REGISTRY_PREFIX
from piranha_analyzers.domain.entities import DiagnosticRule, Severity
from piranha_analyzers.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """Builds rule descriptors and Pylint msgs dicts from a registry mapping."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> RuleRegistryEntry | None:
        """Return registry entry for a rule by id, symbol or pylint message id."""
        entry = registry.get(f"{REGISTRY_PREFIX}{rule_code}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rid, e in registry.items():
            if not rid.startswith(REGISTRY_PREFIX) or not isinstance(e, dict):
                continue
            if rule_code in (e.get("symbol"), e.get("pylint_msgid")):
                return cast(RuleRegistryEntry, dict(e))
        return None

    @staticmethod
    def build_descriptor(
        registry: Mapping[str, RuleRegistryEntry],
        rule_code: str,
        *,
        severity: Severity,
        category: str,
    ) -> DiagnosticRule:
        """
        Build the immutable descriptor for a rule.

        Severity and category come from the rule class; texts come from the
        registry. A missing entry falls back to the rule code so reporting
        never fails.
        """
        entry = RuleMsgBuilder.get_entry(registry, rule_code) or {}
        title = entry.get("title") or rule_code
        return DiagnosticRule(
            rule_id=rule_code,
            title=str(title),
            message_template=str(entry.get("message_template") or title),
            category=category,
            severity=severity,
            enabled_by_default=bool(entry.get("enabled_by_default", True)),
            description=str(entry.get("description") or ""),
            symbol=str(entry.get("symbol") or rule_code.lower()),
            pylint_msgid=str(entry.get("pylint_msgid") or ""),
        )

    @staticmethod
    def build_msgs_for_rules(
        descriptors: list[DiagnosticRule],
    ) -> dict[str, tuple[str, str, str]]:
        """Return { pylint_msgid: (message_template, symbol, description) } for checker.msgs."""
        result: dict[str, tuple[str, str, str]] = {}
        for descriptor in descriptors:
            if not descriptor.pylint_msgid:
                continue
            result[descriptor.pylint_msgid] = (
                descriptor.message_template,
                descriptor.symbol,
                descriptor.description or descriptor.title,
            )
        return result
