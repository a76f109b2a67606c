"""Compilation snapshot: the units under analysis plus whatever astroid can import."""

import logging
import os
import textwrap
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from types import TracebackType
from typing import Optional

import astroid
from astroid.builder import AstroidBuilder
from astroid.manager import AstroidManager

logger = logging.getLogger(__name__)


class Compilation:
    """
    Read-only view of the modules one analysis pass sees.

    Units are registered with astroid's manager so imports between them
    resolve; release() (or leaving the `with` block) unregisters them.
    """

    def __init__(
        self,
        units: Sequence[astroid.nodes.Module] = (),
        failures: Sequence[tuple[str, str]] = (),
        manager: Optional[AstroidManager] = None,
    ) -> None:
        self._manager = manager or astroid.MANAGER
        self.units: tuple[astroid.nodes.Module, ...] = tuple(units)
        self.failures: tuple[tuple[str, str], ...] = tuple(failures)
        self._by_name = {unit.name: unit for unit in self.units if unit.name}
        for name, unit in self._by_name.items():
            self._manager.astroid_cache[name] = unit

    @classmethod
    def from_sources(
        cls, sources: Mapping[str, str], manager: Optional[AstroidManager] = None
    ) -> "Compilation":
        """Build from {module name: source text}. Names with submodules become packages."""
        manager = manager or astroid.MANAGER
        builder = AstroidBuilder(manager)
        units = []
        for name, code in sources.items():
            is_package = any(other.startswith(f"{name}.") for other in sources)
            path = name.replace(".", "/") + ("/__init__.py" if is_package else ".py")
            units.append(builder.string_build(textwrap.dedent(code), modname=name, path=path))
        return cls(units, manager=manager)

    @classmethod
    def from_paths(
        cls, paths: Iterable[str | Path], manager: Optional[AstroidManager] = None
    ) -> "Compilation":
        """
        Parse every .py file under the given files or directories.

        Files whose package-derived names collide (`blog/models.py` and
        `shop/models.py` outside any package) are named by their path from the
        nearest common directory instead; a name that still collides is a failure.
        """
        manager = manager or astroid.MANAGER
        units: list[astroid.nodes.Module] = []
        failures: list[tuple[str, str]] = []
        seen: set[str] = set()
        for file_path, modname in cls._module_names(cls._expand(paths)):
            if modname in seen:
                logger.warning("Skipping %s: duplicate module name %s", file_path, modname)
                failures.append((str(file_path), f"duplicate module name {modname}"))
                continue
            seen.add(modname)
            try:
                units.append(manager.ast_from_file(str(file_path), modname=modname, source=True))
            except (astroid.AstroidBuildingError, OSError) as exc:
                logger.warning("Skipping %s: %s", file_path, exc)
                failures.append((str(file_path), str(exc)))
        return cls(units, failures, manager=manager)

    @staticmethod
    def _expand(paths: Iterable[str | Path]) -> list[Path]:
        files: list[Path] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                candidates = sorted(p for p in path.rglob("*.py") if p.is_file())
            else:
                candidates = [path]
            files.extend(p for p in candidates if p not in files)
        return files

    @classmethod
    def _module_names(cls, files: Sequence[Path]) -> list[tuple[Path, str]]:
        names = [cls._module_name(file_path) for file_path in files]
        groups: dict[str, list[int]] = defaultdict(list)
        for index, name in enumerate(names):
            groups[name].append(index)
        for indexes in groups.values():
            if len(indexes) < 2:
                continue
            resolved = [files[i].resolve() for i in indexes]
            common = Path(os.path.commonpath([p.parent for p in resolved]))
            for i, file_path in zip(indexes, resolved):
                parts = list(file_path.relative_to(common).with_suffix("").parts)
                if parts[-1] == "__init__":
                    parts.pop()
                names[i] = ".".join(parts) or names[i]
        return list(zip(files, names))

    @staticmethod
    def _module_name(file_path: Path) -> str:
        """Dotted name from the enclosing package chain (directories with __init__.py)."""
        resolved = file_path.resolve()
        parts = [] if resolved.stem == "__init__" else [resolved.stem]
        parent = resolved.parent
        while (parent / "__init__.py").exists():
            parts.insert(0, parent.name)
            parent = parent.parent
        return ".".join(parts) or resolved.parent.name

    def module(self, name: str) -> Optional[astroid.nodes.Module]:
        """
        A unit of this compilation, else a module astroid can import, else None.

        The fallback goes through the manager, so it also sees modules an
        earlier build left in the process-wide astroid cache.
        """
        unit = self._by_name.get(name)
        if unit is not None:
            return unit
        try:
            return self._manager.ast_from_module_name(name)
        except astroid.AstroidBuildingError:
            return None

    def release(self) -> None:
        for name, unit in self._by_name.items():
            if self._manager.astroid_cache.get(name) is unit:
                del self._manager.astroid_cache[name]

    def __enter__(self) -> "Compilation":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()
