"""
Pylint plugin entry point - composition root for the checker plugin.

Enable with `load-plugins = ["piranha_analyzers.checker"]`.
"""

from pylint.lint import PyLinter

from piranha_analyzers.infrastructure.di.container import PiranhaContainer
from piranha_analyzers.infrastructure.services.diagnostic_sinks import PylintMessageSink
from piranha_analyzers.use_cases.checks.regions import RegionChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = PiranhaContainer.get_instance()
    linter.register_checker(
        RegionChecker(
            linter,
            gateway=container.get_astroid_gateway(),
            rules=container.get_enabled_rules(),
            resolver_factory=container.create_manager_resolver,
            sink_factory=PylintMessageSink,
            config_loader=container.get_config_loader(),
        )
    )
