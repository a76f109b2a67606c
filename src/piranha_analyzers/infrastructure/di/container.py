from typing import TYPE_CHECKING, Any, Optional, cast

from piranha_analyzers.domain.config import ConfigurationLoader
from piranha_analyzers.domain.rules.non_single_field_region import NonSingleFieldRegionRule
from piranha_analyzers.domain.rules.single_field_complex_region import (
    InvalidSingleFieldComplexRegionRule,
)
from piranha_analyzers.infrastructure.config_file_loader import ConfigFileLoader
from piranha_analyzers.infrastructure.gateways.astroid_gateway import AstroidGateway
from piranha_analyzers.infrastructure.gateways.compilation import Compilation
from piranha_analyzers.infrastructure.services.diagnostic_sinks import DiagnosticCollector
from piranha_analyzers.infrastructure.services.guidance_service import GuidanceService
from piranha_analyzers.infrastructure.services.symbol_resolver import SymbolResolver
from piranha_analyzers.use_cases.analyze import AnalyzeUseCase
from piranha_analyzers.use_cases.dispatch import DispatchTable

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import DiagnosticRule
    from piranha_analyzers.domain.protocols import (
        GuidanceServiceProtocol,
        SymbolResolverProtocol,
    )
    from piranha_analyzers.domain.rules import Checkable


class PiranhaContainer:
    """Dependency Injection Container for the Piranha analyzers."""

    _instance: Optional["PiranhaContainer"] = None

    def __init__(self, config: Optional[dict[str, object]] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config)

    def _register_defaults(self, config: Optional[dict[str, object]]) -> None:
        """Register default implementations for protocols."""
        if config is None:
            config = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton("AstroidGateway", AstroidGateway())
        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)

        # Rules share the registry; disabled ones never reach the dispatch table.
        registry = guidance_service.get_registry()
        rules: list["Checkable"] = [
            InvalidSingleFieldComplexRegionRule(registry),
            NonSingleFieldRegionRule(registry),
        ]
        self.register_singleton("AllRules", rules)
        self.register_singleton(
            "Rules",
            [
                rule
                for rule in rules
                if config_loader.is_rule_enabled(
                    rule.code, rule.descriptor.enabled_by_default)
            ],
        )

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_astroid_gateway(self) -> AstroidGateway:
        """Return the Astroid gateway."""
        return cast(AstroidGateway, self.get("AstroidGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        """Return the guidance service (rule registry)."""
        return cast(GuidanceService, self.get("GuidanceService"))

    def get_enabled_rules(self) -> list["Checkable"]:
        """Return the rules left enabled by configuration."""
        return list(self.get("Rules"))

    def get_rule_descriptors(self) -> list["DiagnosticRule"]:
        """Return the descriptors of every known rule, enabled or not."""
        return [rule.descriptor for rule in self.get("AllRules")]

    def get_dispatch_table(self) -> DispatchTable:
        """Return a dispatch table over the enabled rules."""
        return DispatchTable(self.get_enabled_rules())

    def create_resolver(self, compilation: Compilation) -> "SymbolResolverProtocol":
        """New resolver over a compilation; callers share it across that compilation's units."""
        return SymbolResolver(compilation, self.get_astroid_gateway())

    def create_manager_resolver(self) -> "SymbolResolverProtocol":
        """Resolver over whatever pylint's astroid manager has loaded."""
        return self.create_resolver(Compilation(()))

    def get_analyze_use_case(self) -> AnalyzeUseCase:
        """Return the analyze use case, created lazily."""
        if "AnalyzeUseCase" not in self._singletons:
            self.register_singleton(
                "AnalyzeUseCase",
                AnalyzeUseCase(
                    table=self.get_dispatch_table(),
                    gateway=self.get_astroid_gateway(),
                    config_loader=self.get_config_loader(),
                    resolver_factory=self.create_resolver,
                    reporter_factory=DiagnosticCollector,
                ),
            )
        return cast(AnalyzeUseCase, self.get("AnalyzeUseCase"))

    @classmethod
    def get_instance(cls) -> "PiranhaContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = PiranhaContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
