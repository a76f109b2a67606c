"""Exceptions raised to the host. Rule bodies never raise."""


class PiranhaAnalyzerError(Exception):
    """Base class for analyzer errors."""


class ConfigurationError(PiranhaAnalyzerError):
    """Invalid [tool.piranha-analyzers] section."""


class AnalysisCancelled(PiranhaAnalyzerError):
    """A pass was cancelled between node visits."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Analysis of {path} was cancelled")
        self.path = path
