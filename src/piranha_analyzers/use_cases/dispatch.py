"""Traversal and dispatch: node-kind registry, cancellation, one analysis pass."""

import threading
from collections import defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from piranha_analyzers.domain.exceptions import AnalysisCancelled
from piranha_analyzers.domain.rules import AnalysisContext, Checkable

if TYPE_CHECKING:
    import astroid

    from piranha_analyzers.domain.entities import DiagnosticRule, NodeKind, SyntaxNode
    from piranha_analyzers.domain.protocols import (
        DiagnosticReporterProtocol,
        SymbolResolverProtocol,
        SyntaxGatewayProtocol,
    )


class CancellationToken:
    """Host cancellation signal, consulted between node visits only."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, path: str) -> None:
        if self._event.is_set():
            raise AnalysisCancelled(path)


class DispatchTable:
    """Maps node kinds to the evaluators registered for them."""

    def __init__(self, rules: Iterable[Checkable] = ()) -> None:
        self._evaluators: dict["NodeKind", list[Checkable]] = defaultdict(list)
        self._rules: list[Checkable] = []
        for rule in rules:
            self.register(rule)

    def register(self, rule: Checkable) -> None:
        if any(existing.code == rule.code for existing in self._rules):
            raise ValueError(f"Rule {rule.code} is already registered")
        self._rules.append(rule)
        for kind in rule.node_kinds:
            self._evaluators[kind].append(rule)

    def evaluators_for(self, kind: "NodeKind") -> tuple[Checkable, ...]:
        return tuple(self._evaluators.get(kind, ()))

    @property
    def rules(self) -> tuple[Checkable, ...]:
        return tuple(self._rules)

    @property
    def descriptors(self) -> list["DiagnosticRule"]:
        return [rule.descriptor for rule in self._rules]

    def dispatch(
        self,
        node: "SyntaxNode",
        resolver: "SymbolResolverProtocol",
        reporter: "DiagnosticReporterProtocol",
    ) -> None:
        evaluators = self.evaluators_for(node.kind)
        if not evaluators:
            return
        context = AnalysisContext(node=node, resolver=resolver, reporter=reporter)
        for rule in evaluators:
            rule.evaluate(context)


class AnalysisPass:
    """Walks one unit and dispatches each syntax node; aborts between visits on cancellation."""

    def __init__(
        self,
        table: DispatchTable,
        gateway: "SyntaxGatewayProtocol",
        resolver: "SymbolResolverProtocol",
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._table = table
        self._gateway = gateway
        self._resolver = resolver
        self._cancellation = cancellation or CancellationToken()

    def run(
        self, module: "astroid.nodes.Module", reporter: "DiagnosticReporterProtocol"
    ) -> None:
        path = str(module.file or module.name)
        for node in self._gateway.walk(module):
            self._cancellation.raise_if_cancelled(path)
            self._table.dispatch(node, self._resolver, reporter)
