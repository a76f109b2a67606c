"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import sys

import typer

from piranha_analyzers.domain.exceptions import ConfigurationError
from piranha_analyzers.infrastructure.di.container import PiranhaContainer
from piranha_analyzers.infrastructure.gateways.compilation import Compilation
from piranha_analyzers.infrastructure.reporters import TerminalReportRenderer
from piranha_analyzers.interface.cli import CLIAppFactory, CLIDependencies

logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    try:
        container = PiranhaContainer()
    except ConfigurationError as exc:
        typer.echo(f"piranha-analyzers: configuration error: {exc}", err=True)
        sys.exit(2)

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        analyze_use_case=container.get_analyze_use_case(),
        renderer=TerminalReportRenderer(),
        compilation_factory=Compilation.from_paths,
        rules=container.get_rule_descriptors(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
