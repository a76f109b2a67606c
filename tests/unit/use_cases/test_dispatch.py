"""Tests for DispatchTable, CancellationToken and AnalysisPass."""

import unittest
from unittest.mock import MagicMock

import pytest

from piranha_analyzers.domain.entities import NodeKind, SyntaxNode
from piranha_analyzers.domain.exceptions import AnalysisCancelled
from piranha_analyzers.domain.rules import AnalysisContext
from piranha_analyzers.use_cases.dispatch import AnalysisPass, CancellationToken, DispatchTable
from tests.unit.checker_test_utils import create_mock_node


def _rule(code: str, *kinds: NodeKind) -> MagicMock:
    rule = MagicMock()
    rule.code = code
    rule.node_kinds = kinds
    rule.descriptor = f"descriptor-{code}"
    return rule


def _node(kind: NodeKind) -> SyntaxNode:
    return SyntaxNode(kind, create_mock_node())


class TestDispatchTable(unittest.TestCase):
    def test_evaluators_by_kind_in_registration_order(self) -> None:
        member_a = _rule("A", NodeKind.MEMBER_DECLARATION)
        both = _rule("B", NodeKind.MEMBER_DECLARATION, NodeKind.ANNOTATION_USAGE)
        table = DispatchTable([member_a, both])

        assert table.evaluators_for(NodeKind.MEMBER_DECLARATION) == (member_a, both)
        assert table.evaluators_for(NodeKind.ANNOTATION_USAGE) == (both,)
        assert table.evaluators_for(NodeKind.TYPE_DECLARATION) == ()
        assert table.descriptors == ["descriptor-A", "descriptor-B"]

    def test_duplicate_codes_rejected(self) -> None:
        table = DispatchTable([_rule("A", NodeKind.MEMBER_DECLARATION)])
        with pytest.raises(ValueError, match="already registered"):
            table.register(_rule("A", NodeKind.ANNOTATION_USAGE))

    def test_dispatch_builds_context(self) -> None:
        rule = _rule("A", NodeKind.MEMBER_DECLARATION)
        resolver, reporter = MagicMock(), MagicMock()
        node = _node(NodeKind.MEMBER_DECLARATION)

        DispatchTable([rule]).dispatch(node, resolver, reporter)

        rule.evaluate.assert_called_once_with(
            AnalysisContext(node=node, resolver=resolver, reporter=reporter)
        )

    def test_dispatch_skips_unregistered_kinds(self) -> None:
        rule = _rule("A", NodeKind.MEMBER_DECLARATION)
        DispatchTable([rule]).dispatch(_node(NodeKind.METHOD_DECLARATION), MagicMock(), MagicMock())
        rule.evaluate.assert_not_called()


class TestCancellationToken(unittest.TestCase):
    def test_cancel(self) -> None:
        token = CancellationToken()
        assert not token.is_cancelled
        token.raise_if_cancelled("models.py")
        token.cancel()
        assert token.is_cancelled
        with pytest.raises(AnalysisCancelled, match="models.py"):
            token.raise_if_cancelled("models.py")


class TestAnalysisPass(unittest.TestCase):
    def setUp(self) -> None:
        self.rule = _rule("A", NodeKind.MEMBER_DECLARATION)
        self.gateway = MagicMock()
        self.module = MagicMock()
        self.module.file = "models.py"

    def test_run_dispatches_every_node(self) -> None:
        nodes = [_node(NodeKind.TYPE_DECLARATION), _node(NodeKind.MEMBER_DECLARATION)]
        self.gateway.walk.return_value = nodes
        reporter = MagicMock()

        AnalysisPass(DispatchTable([self.rule]), self.gateway, MagicMock()).run(
            self.module, reporter
        )

        self.gateway.walk.assert_called_once_with(self.module)
        assert self.rule.evaluate.call_count == 1

    def test_cancellation_between_visits(self) -> None:
        token = CancellationToken()
        self.rule.evaluate.side_effect = lambda context: token.cancel()
        self.gateway.walk.return_value = [
            _node(NodeKind.MEMBER_DECLARATION),
            _node(NodeKind.MEMBER_DECLARATION),
        ]

        analysis_pass = AnalysisPass(DispatchTable([self.rule]), self.gateway, MagicMock(), token)
        with pytest.raises(AnalysisCancelled):
            analysis_pass.run(self.module, MagicMock())
        assert self.rule.evaluate.call_count == 1
