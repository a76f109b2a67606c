"""Protocol for report rendering - no infrastructure imports."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import AnalysisReport, DiagnosticRule


class ReportRenderer(Protocol):
    """Protocol for rendering analysis results and rule listings."""

    def render_report(self, report: "AnalysisReport", format: str = "text") -> None:
        """Render an analysis report. format: text (default) or json."""
        ...

    def render_rules(self, rules: Sequence["DiagnosticRule"]) -> None:
        """List the rule descriptors."""
        ...
