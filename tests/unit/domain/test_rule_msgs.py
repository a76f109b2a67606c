"""Unit tests for RuleMsgBuilder."""

import unittest

from piranha_analyzers.domain.entities import Severity
from piranha_analyzers.domain.rule_msgs import RuleMsgBuilder

REGISTRY = {
    "piranha.PA0001": {
        "rule_id": "PA0001",
        "pylint_msgid": "W9501",
        "symbol": "non-single-field-region",
        "title": "Title one",
        "message_template": "Field '%s'",
        "description": "Long description",
        "enabled_by_default": True,
    },
    "piranha.PA0002": {
        "rule_id": "PA0002",
        "pylint_msgid": "E9502",
        "symbol": "invalid-single-field-complex-region",
        "title": "Title two",
        "message_template": "Single field",
        "enabled_by_default": False,
    },
}


class TestRuleMsgBuilder(unittest.TestCase):
    def test_get_entry_by_rule_id_symbol_and_msgid(self) -> None:
        for code in ("PA0001", "non-single-field-region", "W9501"):
            entry = RuleMsgBuilder.get_entry(REGISTRY, code)
            assert entry is not None
            assert entry["rule_id"] == "PA0001"

    def test_get_entry_missing(self) -> None:
        assert RuleMsgBuilder.get_entry(REGISTRY, "PA0404") is None

    def test_build_descriptor(self) -> None:
        rule = RuleMsgBuilder.build_descriptor(
            REGISTRY, "PA0002", severity=Severity.ERROR, category="Usage"
        )
        assert rule.rule_id == "PA0002"
        assert rule.title == "Title two"
        assert rule.message_template == "Single field"
        assert rule.severity is Severity.ERROR
        assert rule.category == "Usage"
        assert rule.enabled_by_default is False
        assert rule.pylint_msgid == "E9502"
        assert rule.symbol == "invalid-single-field-complex-region"

    def test_build_descriptor_without_entry_falls_back_to_code(self) -> None:
        rule = RuleMsgBuilder.build_descriptor(
            {}, "PA0001", severity=Severity.WARNING, category="Usage"
        )
        assert rule.title == "PA0001"
        assert rule.message_template == "PA0001"
        assert rule.symbol == "pa0001"
        assert rule.pylint_msgid == ""

    def test_build_msgs_for_rules(self) -> None:
        descriptors = [
            RuleMsgBuilder.build_descriptor(REGISTRY, code, severity=Severity.WARNING, category="Usage")
            for code in ("PA0001", "PA0002")
        ]
        msgs = RuleMsgBuilder.build_msgs_for_rules(descriptors)
        assert msgs == {
            "W9501": ("Field '%s'", "non-single-field-region", "Long description"),
            "E9502": ("Single field", "invalid-single-field-complex-region", "Title two"),
        }

    def test_build_msgs_skips_rules_without_pylint_id(self) -> None:
        descriptor = RuleMsgBuilder.build_descriptor(
            {}, "PA0001", severity=Severity.WARNING, category="Usage"
        )
        assert RuleMsgBuilder.build_msgs_for_rules([descriptor]) == {}
