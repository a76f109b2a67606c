from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    import astroid

    from piranha_analyzers.domain.entities import (
        AnnotationUsage,
        DiagnosticRule,
        SourceLocation,
        SyntaxNode,
        TypeDeclaration,
        TypeIdentity,
    )
    from piranha_analyzers.domain.registry_types import RuleRegistryEntry


class SymbolResolverProtocol(Protocol):
    """Maps qualified names and syntax to canonical type identities."""

    def resolve(self, qualified_name: str) -> Optional["TypeIdentity"]:
        """Identity for a fully-qualified class name, or None if absent."""
        ...

    def same_identity(self, a: "TypeIdentity", b: Optional["TypeIdentity"]) -> bool:
        ...

    def identity_of(
        self, type_expression: Optional["astroid.nodes.NodeNG"]
    ) -> Optional["TypeIdentity"]:
        """Identity of a declared-type expression, nullability recorded."""
        ...

    def converted_identity(self, usage: "AnnotationUsage") -> Optional["TypeIdentity"]:
        """Identity of the class an annotation usage converts to."""
        ...

    def declaration_of(self, identity: "TypeIdentity") -> Optional["TypeDeclaration"]:
        """Source declaration of a class, or None when only binary/stub is available."""
        ...


class DiagnosticReporterProtocol(Protocol):
    """Sink for produced findings."""

    def report(
        self,
        rule: "DiagnosticRule",
        location: "SourceLocation",
        args: Sequence[str] = (),
    ) -> None:
        ...


class SyntaxGatewayProtocol(Protocol):
    """Builds kind-tagged syntax views from astroid trees."""

    def walk(self, module: "astroid.nodes.Module") -> "list[SyntaxNode]":
        ...

    def walk_class(self, node: "astroid.nodes.ClassDef") -> "list[SyntaxNode]":
        ...

    def type_declaration(self, node: "astroid.nodes.ClassDef") -> "TypeDeclaration":
        ...

    def is_generated(self, module: "astroid.nodes.Module") -> bool:
        ...


class GuidanceServiceProtocol(Protocol):
    """Access to the packaged rule registry."""

    def get_registry(self) -> "dict[str, RuleRegistryEntry]":
        ...

    def get_entry(self, rule_code: str) -> "RuleRegistryEntry | None":
        ...
