"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `tests.*` helpers import by name.
"""

import astroid
import pytest

from piranha_analyzers.infrastructure.di.container import PiranhaContainer


@pytest.fixture(autouse=True)
def _reset_container():
    """Each test gets a fresh global container."""
    PiranhaContainer.reset()
    yield
    PiranhaContainer.reset()


@pytest.fixture(autouse=True)
def _clear_astroid_cache():
    """Modules built by one test (pylint runs included) must not resolve in the next."""
    yield
    astroid.MANAGER.clear_cache()
