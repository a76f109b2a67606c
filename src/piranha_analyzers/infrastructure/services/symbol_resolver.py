"""Memoizing symbol resolver, one per compilation."""

import logging
from typing import TYPE_CHECKING, Optional

import astroid

from piranha_analyzers.domain.entities import (
    AnnotationUsage,
    TypeDeclaration,
    TypeIdentity,
    same_identity,
)
from piranha_analyzers.domain.protocols import SymbolResolverProtocol

if TYPE_CHECKING:
    from piranha_analyzers.infrastructure.gateways.astroid_gateway import AstroidGateway
    from piranha_analyzers.infrastructure.gateways.compilation import Compilation

logger = logging.getLogger(__name__)

_MISSING = object()


class SymbolResolver(SymbolResolverProtocol):
    """
    Maps qualified names and type expressions to canonical class identities.

    Lookups by name are cached, misses included. The caches are plain dicts
    written with setdefault: resolution is deterministic, so two threads
    racing on a miss compute the same value and the first write wins.
    """

    def __init__(self, compilation: "Compilation", gateway: "AstroidGateway") -> None:
        self._compilation = compilation
        self._gateway = gateway
        self._by_name: dict[str, Optional[astroid.nodes.ClassDef]] = {}
        self._declarations: dict[astroid.nodes.ClassDef, Optional[TypeDeclaration]] = {}

    # ------------------------------------------------------------------ #
    # Names
    # ------------------------------------------------------------------ #

    def resolve(self, qualified_name: str) -> Optional[TypeIdentity]:
        class_node = self._class_for_name(qualified_name)
        if class_node is None:
            return None
        return TypeIdentity(qname=class_node.qname(), node=class_node)

    def same_identity(self, a: TypeIdentity, b: Optional[TypeIdentity]) -> bool:
        return same_identity(a, b)

    def _class_for_name(self, qualified_name: str) -> Optional[astroid.nodes.ClassDef]:
        cached = self._by_name.get(qualified_name, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        class_node = self._lookup(qualified_name)
        if class_node is None:
            logger.debug("Type %s not found in compilation", qualified_name)
        return self._by_name.setdefault(qualified_name, class_node)

    def _lookup(self, qualified_name: str) -> Optional[astroid.nodes.ClassDef]:
        """Walk the longest importable module prefix, then the remaining attributes."""
        parts = qualified_name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module = self._compilation.module(".".join(parts[:split]))
            if module is not None:
                return self._walk_attributes(module, parts[split:])
        return None

    def _walk_attributes(
        self, scope: astroid.nodes.NodeNG, names: list[str]
    ) -> Optional[astroid.nodes.ClassDef]:
        current = scope
        for name in names:
            try:
                candidates = [
                    inferred
                    for inferred in current.igetattr(name)
                    if isinstance(inferred, (astroid.nodes.ClassDef, astroid.nodes.Module))
                ]
            except (astroid.InferenceError, astroid.AttributeInferenceError):
                return None
            if not candidates:
                return None
            current = candidates[0]
        if isinstance(current, astroid.nodes.ClassDef):
            return current
        return None

    # ------------------------------------------------------------------ #
    # Syntax
    # ------------------------------------------------------------------ #

    def identity_of(
        self, type_expression: Optional[astroid.nodes.NodeNG]
    ) -> Optional[TypeIdentity]:
        core, nullable = self._gateway.unwrap_declared_type(type_expression)
        if core is None:
            return None
        class_node = self._single_class(core)
        if class_node is None:
            return None
        return TypeIdentity(qname=class_node.qname(), nullable=nullable, node=class_node)

    def converted_identity(self, usage: AnnotationUsage) -> Optional[TypeIdentity]:
        """Class of the usage's value: `Region()` converts to Region, `Region` to itself."""
        qnames: set[str] = set()
        try:
            for inferred in usage.node.infer():
                if inferred is astroid.Uninferable:
                    continue
                if isinstance(inferred, astroid.nodes.ClassDef):
                    qnames.add(inferred.qname())
                elif isinstance(inferred, astroid.Instance):
                    qnames.add(inferred.pytype())
                else:
                    return None
        except astroid.InferenceError:
            return None
        if len(qnames) != 1:
            return None
        return TypeIdentity(qname=qnames.pop())

    def _single_class(self, node: astroid.nodes.NodeNG) -> Optional[astroid.nodes.ClassDef]:
        classes: dict[str, astroid.nodes.ClassDef] = {}
        try:
            for inferred in node.infer():
                if inferred is astroid.Uninferable:
                    continue
                if not isinstance(inferred, astroid.nodes.ClassDef):
                    return None
                classes.setdefault(inferred.qname(), inferred)
        except astroid.InferenceError:
            return None
        if len(classes) != 1:
            return None
        return next(iter(classes.values()))

    # ------------------------------------------------------------------ #
    # Declarations
    # ------------------------------------------------------------------ #

    def declaration_of(self, identity: TypeIdentity) -> Optional[TypeDeclaration]:
        """
        Source declaration of the class, or None for stub / compiled classes.

        Cached per class node, not per name: two files may define classes
        with the same qualified name.
        """
        class_node = identity.node or self._class_for_name(identity.qname)
        if class_node is None:
            return None
        cached = self._declarations.get(class_node, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        declaration = None
        if self._gateway.has_source(class_node):
            declaration = self._gateway.type_declaration(class_node)
        return self._declarations.setdefault(class_node, declaration)
