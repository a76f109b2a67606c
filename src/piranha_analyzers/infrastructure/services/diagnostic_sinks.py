"""Diagnostic reporters: an in-memory collector and a pylint bridge."""

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING

from piranha_analyzers.domain.entities import (
    Diagnostic,
    DiagnosticRule,
    SourceLocation,
)
from piranha_analyzers.domain.protocols import DiagnosticReporterProtocol

if TYPE_CHECKING:
    from pylint.checkers import BaseChecker


class DiagnosticCollector(DiagnosticReporterProtocol):
    """Accumulates the diagnostics of one pass. Safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._diagnostics: list[Diagnostic] = []

    def report(
        self,
        rule: DiagnosticRule,
        location: SourceLocation,
        args: Sequence[str] = (),
    ) -> None:
        diagnostic = Diagnostic(
            rule_id=rule.rule_id,
            message=rule.format_message(tuple(args)),
            location=location,
            severity=rule.severity,
        )
        with self._lock:
            self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        with self._lock:
            return tuple(self._diagnostics)


class PylintMessageSink(DiagnosticReporterProtocol):
    """Forwards reports to a pylint checker as messages on the reported node."""

    def __init__(self, checker: "BaseChecker") -> None:
        self._checker = checker

    def report(
        self,
        rule: DiagnosticRule,
        location: SourceLocation,
        args: Sequence[str] = (),
    ) -> None:
        self._checker.add_message(
            rule.pylint_msgid or rule.symbol,
            node=location.node,
            args=tuple(args) or None,
        )
