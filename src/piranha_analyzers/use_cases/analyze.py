"""Analyze use case: runs one pass per compilation unit and aggregates the results."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Optional, Protocol

from piranha_analyzers.domain.entities import AnalysisReport, Diagnostic, UnitResult
from piranha_analyzers.domain.exceptions import AnalysisCancelled
from piranha_analyzers.domain.protocols import DiagnosticReporterProtocol
from piranha_analyzers.use_cases.dispatch import AnalysisPass, CancellationToken, DispatchTable

if TYPE_CHECKING:
    import astroid

    from piranha_analyzers.domain.config import ConfigurationLoader
    from piranha_analyzers.domain.protocols import (
        SymbolResolverProtocol,
        SyntaxGatewayProtocol,
    )
    from piranha_analyzers.infrastructure.gateways.compilation import Compilation

logger = logging.getLogger(__name__)


class CollectingReporter(DiagnosticReporterProtocol, Protocol):
    """A reporter that exposes what it collected."""

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        ...


class AnalyzeUseCase:
    """
    Host side of the engine: one stateless pass per unit.

    All units share the compilation's resolver; each gets its own collector.
    A cancelled unit reports nothing, generated units are skipped unless
    configured otherwise, and unreadable files surface as skipped results.
    """

    def __init__(
        self,
        table: DispatchTable,
        gateway: "SyntaxGatewayProtocol",
        config_loader: "ConfigurationLoader",
        resolver_factory: Callable[["Compilation"], "SymbolResolverProtocol"],
        reporter_factory: Callable[[], CollectingReporter],
    ) -> None:
        self._table = table
        self._gateway = gateway
        self._config_loader = config_loader
        self._resolver_factory = resolver_factory
        self._reporter_factory = reporter_factory

    def execute(
        self,
        compilation: "Compilation",
        jobs: Optional[int] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> AnalysisReport:
        resolver = self._resolver_factory(compilation)
        analysis_pass = AnalysisPass(self._table, self._gateway, resolver, cancellation)

        results = [
            UnitResult(path=path, skipped=True, reason=reason)
            for path, reason in compilation.failures
        ]
        workers = jobs or self._config_loader.jobs
        units = compilation.units
        if workers > 1 and len(units) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results.extend(
                    executor.map(lambda unit: self._analyze_unit(analysis_pass, unit), units)
                )
        else:
            results.extend(self._analyze_unit(analysis_pass, unit) for unit in units)
        return AnalysisReport(units=tuple(results))

    def _analyze_unit(
        self, analysis_pass: AnalysisPass, unit: "astroid.nodes.Module"
    ) -> UnitResult:
        path = str(unit.file or unit.name)
        if not self._config_loader.analyze_generated and self._gateway.is_generated(unit):
            logger.info("Skipping generated file %s", path)
            return UnitResult(path=path, skipped=True, reason="generated")

        reporter = self._reporter_factory()
        try:
            analysis_pass.run(unit, reporter)
        except AnalysisCancelled as exc:
            logger.warning("%s", exc)
            return UnitResult(path=path, cancelled=True, reason=str(exc))
        return UnitResult(path=path, diagnostics=reporter.diagnostics)
