"""Region checks (W9501, E9502)."""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Optional

import astroid
from pylint.checkers import BaseChecker

from piranha_analyzers.domain.rule_msgs import RuleMsgBuilder
from piranha_analyzers.use_cases.dispatch import DispatchTable

if TYPE_CHECKING:
    from pylint.lint import PyLinter

    from piranha_analyzers.domain.config import ConfigurationLoader
    from piranha_analyzers.domain.protocols import (
        DiagnosticReporterProtocol,
        SymbolResolverProtocol,
        SyntaxGatewayProtocol,
    )
    from piranha_analyzers.domain.rules import Checkable


class RegionChecker(BaseChecker):
    """Piranha region rules. Thin: dispatches each class's syntax nodes to the rules."""

    name: str = "piranha-regions"

    def __init__(
        self,
        linter: "PyLinter",
        gateway: "SyntaxGatewayProtocol",
        rules: Sequence["Checkable"],
        resolver_factory: Callable[[], "SymbolResolverProtocol"],
        sink_factory: Callable[[BaseChecker], "DiagnosticReporterProtocol"],
        config_loader: "ConfigurationLoader",
    ) -> None:
        self._table = DispatchTable(rules)
        self.msgs = RuleMsgBuilder.build_msgs_for_rules(
            self._table.descriptors)  # type: ignore[assignment]
        super().__init__(linter)
        self.config_loader = config_loader
        self._gateway = gateway
        self._resolver_factory = resolver_factory
        self._sink = sink_factory(self)
        self._resolver: Optional["SymbolResolverProtocol"] = None
        self._skip_module = False

    def open(self) -> None:
        """A fresh resolver per pylint run."""
        self._resolver = self._resolver_factory()

    def close(self) -> None:
        self._resolver = None

    def _get_resolver(self) -> "SymbolResolverProtocol":
        if self._resolver is None:
            self._resolver = self._resolver_factory()
        return self._resolver

    def visit_module(self, node: astroid.nodes.Module) -> None:
        self._skip_module = (
            not self.config_loader.analyze_generated and self._gateway.is_generated(node)
        )

    def visit_classdef(self, node: astroid.nodes.ClassDef) -> None:
        if self._skip_module:
            return
        resolver = self._get_resolver()
        for syntax_node in self._gateway.walk_class(node):
            self._table.dispatch(syntax_node, resolver, self._sink)
