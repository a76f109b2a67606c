from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    rule_id: str
    pylint_msgid: str
    symbol: str
    title: str
    message_template: str
    description: str
    enabled_by_default: bool
