"""CLI entry points for the Piranha analyzers - Thin Controller using Typer."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from piranha_analyzers.domain.config import ConfigurationLoader
from piranha_analyzers.interface.reporters import ReportRenderer

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import DiagnosticRule
    from piranha_analyzers.infrastructure.gateways.compilation import Compilation
    from piranha_analyzers.use_cases.analyze import AnalyzeUseCase

FORMATS = ("text", "json")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    analyze_use_case: "AnalyzeUseCase"
    renderer: ReportRenderer
    compilation_factory: Callable[[Sequence[Path]], "Compilation"]
    rules: Sequence["DiagnosticRule"]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="piranha-analyzers",
            help="Static checks for Piranha content type regions and fields.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] = typer.Argument(..., help="Files or directories to analyze"),  # noqa: B008
            format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
            jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Worker threads (default: config 'jobs')"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Analyze source files; exits 1 when an error-severity diagnostic is reported."""
            CLIAppFactory.configure_logging(verbose)
            if format not in FORMATS:
                typer.echo(f"Unknown format '{format}'. Use one of: {', '.join(FORMATS)}", err=True)
                raise typer.Exit(code=2)

            with deps.compilation_factory(paths) as compilation:
                report = deps.analyze_use_case.execute(compilation, jobs=jobs)
            deps.renderer.render_report(report, format=format)
            if report.has_errors:
                raise typer.Exit(code=1)

        @app.command()
        def rules() -> None:
            """List the rules and whether configuration disabled them."""
            deps.renderer.render_rules(deps.rules)
            disabled = sorted(deps.config_loader.disabled_rules)
            if disabled:
                typer.echo(f"Disabled by configuration: {', '.join(disabled)}")

        return app
