"""Terminal rendering of analysis reports."""

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

import typer

from piranha_analyzers.domain.entities import Severity

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import AnalysisReport, DiagnosticRule

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.ERROR: typer.colors.RED,
    Severity.WARNING: typer.colors.YELLOW,
    Severity.INFO: typer.colors.BLUE,
}


class TerminalReportRenderer:
    """Renders reports as `path:line:col: PA0001 warning: message` lines, or as JSON."""

    def render_report(self, report: "AnalysisReport", format: str = "text") -> None:
        if format == "json":
            typer.echo(json.dumps(self.to_json(report), indent=2))
            return

        for unit in report.units:
            if unit.skipped:
                typer.echo(f"{unit.path}: skipped ({unit.reason})", err=True)
            elif unit.cancelled:
                typer.echo(f"{unit.path}: cancelled", err=True)

        diagnostics = report.sorted_diagnostics()
        for diagnostic in diagnostics:
            label = typer.style(
                f"{diagnostic.rule_id} {diagnostic.severity.value}",
                fg=SEVERITY_COLORS.get(diagnostic.severity),
                bold=diagnostic.severity is Severity.ERROR,
            )
            typer.echo(f"{diagnostic.location}: {label}: {diagnostic.message}")

        errors = sum(1 for d in diagnostics if d.severity is Severity.ERROR)
        warnings = sum(1 for d in diagnostics if d.severity is Severity.WARNING)
        typer.echo(
            f"{len(report.units)} file(s) analyzed: "
            f"{errors} error(s), {warnings} warning(s)"
        )

    @staticmethod
    def to_json(report: "AnalysisReport") -> dict[str, object]:
        return {
            "diagnostics": [d.to_dict() for d in report.sorted_diagnostics()],
            "units": [
                {
                    "path": unit.path,
                    "diagnostics": len(unit.diagnostics),
                    "cancelled": unit.cancelled,
                    "skipped": unit.skipped,
                    "reason": unit.reason,
                }
                for unit in report.units
            ],
            "has_errors": report.has_errors,
        }

    def render_rules(self, rules: Sequence["DiagnosticRule"]) -> None:
        for rule in rules:
            typer.echo(
                f"{rule.rule_id} ({rule.pylint_msgid} {rule.symbol}) "
                f"[{rule.severity.value}, {rule.category}] {rule.title}"
            )
            if rule.description:
                typer.echo(f"    {rule.description}")
