"""Invalid single-field complex region rule (PA0002)."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from piranha_analyzers.domain.constants import (
    COMPLEX_REGION_MARKER,
    FIELD_MARKER,
    INVALID_SINGLE_FIELD_COMPLEX_REGION,
    USAGE_CATEGORY,
)
from piranha_analyzers.domain.entities import (
    AnnotationUsage,
    DiagnosticRule,
    MemberDeclaration,
    NodeKind,
    Severity,
)
from piranha_analyzers.domain.rule_msgs import RuleMsgBuilder
from piranha_analyzers.domain.rules import AnalysisContext, Checkable
from piranha_analyzers.domain.services.member_scanner import MemberScanner

if TYPE_CHECKING:
    from piranha_analyzers.domain.registry_types import RuleRegistryEntry

logger = logging.getLogger(__name__)


class InvalidSingleFieldComplexRegionRule(Checkable):
    """
    Rule for PA0002: a complex region whose type holds exactly one field.

    Triggered on every annotation usage. When the usage is the region marker
    applied to a member, the member's declared class is inspected: if exactly
    one of its members carries the field marker, the region should have been
    declared as a single-field region. Only field-marker-annotated members are
    counted.
    """

    code: str = INVALID_SINGLE_FIELD_COMPLEX_REGION
    severity: ClassVar[Severity] = Severity.ERROR
    category: ClassVar[str] = USAGE_CATEGORY
    node_kinds: ClassVar[tuple[NodeKind, ...]] = (NodeKind.ANNOTATION_USAGE,)

    def __init__(self, registry: Mapping[str, "RuleRegistryEntry"]) -> None:
        self._descriptor = RuleMsgBuilder.build_descriptor(
            registry, self.code, severity=self.severity, category=self.category
        )

    @property
    def descriptor(self) -> DiagnosticRule:
        return self._descriptor

    def evaluate(self, context: AnalysisContext) -> None:
        node = context.node
        if node.kind is not NodeKind.ANNOTATION_USAGE:
            return
        usage = node.declaration
        if not isinstance(usage, AnnotationUsage):
            return

        resolver = context.resolver
        region_type = resolver.resolve(COMPLEX_REGION_MARKER)
        if region_type is None:
            logger.debug("%s unresolved; %s inert", COMPLEX_REGION_MARKER, self.code)
            return
        if not resolver.same_identity(region_type, resolver.converted_identity(usage)):
            return

        owner = node.owner
        if owner is None or owner.kind is not NodeKind.MEMBER_DECLARATION:
            return
        member = owner.declaration
        if not isinstance(member, MemberDeclaration):
            return

        declared_type = resolver.identity_of(member.type_expression)
        if declared_type is None:
            return
        declaration = resolver.declaration_of(declared_type)
        if declaration is None:
            logger.debug("No source for %s; %s inert for %s", declared_type.qname, self.code, member.name)
            return

        field_type = resolver.resolve(FIELD_MARKER)
        if field_type is None:
            logger.debug("%s unresolved; %s inert", FIELD_MARKER, self.code)
            return

        fields = MemberScanner(resolver).marked_members(declaration, field_type)
        if len(fields) == 1:
            context.report(self._descriptor, member.location)
