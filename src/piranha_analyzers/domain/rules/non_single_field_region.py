"""Non-single-field region rule (PA0001)."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from piranha_analyzers.domain.constants import (
    BUILTIN_FIELD_TYPES,
    NON_SINGLE_FIELD_REGION,
    SIMPLE_REGION_MARKER,
    USAGE_CATEGORY,
)
from piranha_analyzers.domain.entities import (
    DiagnosticRule,
    MemberDeclaration,
    NodeKind,
    Severity,
)
from piranha_analyzers.domain.rule_msgs import RuleMsgBuilder
from piranha_analyzers.domain.rules import AnalysisContext, Checkable
from piranha_analyzers.domain.services.annotation_matcher import AnnotationMatcher

if TYPE_CHECKING:
    from piranha_analyzers.domain.registry_types import RuleRegistryEntry

logger = logging.getLogger(__name__)


class NonSingleFieldRegionRule(Checkable):
    """
    Rule for PA0001: a built-in field type used directly as a region.

    The built-in field types are meant to live inside complex regions. Every
    region marker on a member declared with one of them is reported
    separately, naming the field type.
    """

    code: str = NON_SINGLE_FIELD_REGION
    severity: ClassVar[Severity] = Severity.WARNING
    category: ClassVar[str] = USAGE_CATEGORY
    node_kinds: ClassVar[tuple[NodeKind, ...]] = (NodeKind.MEMBER_DECLARATION,)
    field_types: ClassVar[tuple[str, ...]] = BUILTIN_FIELD_TYPES

    def __init__(self, registry: Mapping[str, "RuleRegistryEntry"]) -> None:
        self._descriptor = RuleMsgBuilder.build_descriptor(
            registry, self.code, severity=self.severity, category=self.category
        )

    @property
    def descriptor(self) -> DiagnosticRule:
        return self._descriptor

    def evaluate(self, context: AnalysisContext) -> None:
        node = context.node
        if node.kind is not NodeKind.MEMBER_DECLARATION:
            return
        member = node.declaration
        if not isinstance(member, MemberDeclaration):
            return

        resolver = context.resolver
        declared_type = resolver.identity_of(member.type_expression)
        if declared_type is None:
            return

        for qname in self.field_types:
            field_type = resolver.resolve(qname)
            if field_type is None:
                continue
            if not resolver.same_identity(field_type, declared_type):
                continue

            region_type = resolver.resolve(SIMPLE_REGION_MARKER)
            if region_type is None:
                logger.debug("%s unresolved; %s inert", SIMPLE_REGION_MARKER, self.code)
                return

            for _usage in AnnotationMatcher(resolver).iter_matching(member, region_type):
                context.report(self._descriptor, member.location, (field_type.short_name,))
