"""Rule protocol and the context bundle handed to rule evaluators."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

__all__ = [
    "AnalysisContext",
    "Checkable",
]

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import (
        DiagnosticRule,
        NodeKind,
        SourceLocation,
        SyntaxNode,
    )
    from piranha_analyzers.domain.protocols import (
        DiagnosticReporterProtocol,
        SymbolResolverProtocol,
    )


@dataclass(frozen=True)
class AnalysisContext:
    """Everything one evaluator invocation may touch: the node, the resolver, the sink."""

    node: "SyntaxNode"
    resolver: "SymbolResolverProtocol"
    reporter: "DiagnosticReporterProtocol"

    def report(
        self,
        rule: "DiagnosticRule",
        location: "SourceLocation",
        args: Sequence[str] = (),
    ) -> None:
        self.reporter.report(rule, location, args)


class Checkable(Protocol):
    """
    A rule evaluator registered for one or more node kinds.

    evaluate() is synchronous, never blocks, never raises to the host and has
    no side effects other than reporting through the context.
    """

    code: str
    node_kinds: ClassVar[tuple["NodeKind", ...]]

    @property
    def descriptor(self) -> "DiagnosticRule":
        ...

    def evaluate(self, context: AnalysisContext) -> None:
        ...
