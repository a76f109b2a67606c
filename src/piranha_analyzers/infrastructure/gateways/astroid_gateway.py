"""AST gateway: kind-tagged syntax views over astroid trees."""

import logging
from typing import ClassVar, Optional

import astroid

from piranha_analyzers.domain.constants import (
    GENERATED_HEADER_LINES,
    GENERATED_MARKERS,
    PROPERTY_DECORATORS,
    TYPING_MODULES,
)
from piranha_analyzers.domain.entities import (
    AnnotationUsage,
    MemberDeclaration,
    NodeKind,
    SyntaxNode,
    TypeDeclaration,
)
from piranha_analyzers.domain.protocols import SyntaxGatewayProtocol

logger = logging.getLogger(__name__)


class AstroidGateway(SyntaxGatewayProtocol):
    """
    Turns astroid classes into declarations the rules understand.

    Members are class-body annotated attributes (`hero: Annotated[T, Region()]`)
    and properties (`@property def hero(self) -> T`). Annotation usages are the
    Annotated metadata elements of an attribute, the non-property decorators of
    a property, and the decorators of classes and plain methods.
    """

    ACCESSOR_ATTRS: ClassVar[frozenset[str]] = frozenset({"setter", "getter", "deleter"})

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #

    def walk(self, module: astroid.nodes.Module) -> list[SyntaxNode]:
        """Syntax nodes of every class in the module, in source order."""
        result: list[SyntaxNode] = []
        for class_node in module.nodes_of_class(astroid.nodes.ClassDef):
            result.extend(self.walk_class(class_node))
        return result

    def walk_class(self, node: astroid.nodes.ClassDef) -> list[SyntaxNode]:
        """The class, its decorators, then each member or method followed by its annotations."""
        declaration = self.type_declaration(node)
        type_node = SyntaxNode(NodeKind.TYPE_DECLARATION, node, declaration)
        result = [type_node]
        result.extend(self._usage_nodes(self._decorator_usages(node), type_node))

        members = {id(member.node): member for member in declaration.members}
        for stmt in node.body:
            member = members.get(id(stmt))
            if member is not None:
                member_node = SyntaxNode(NodeKind.MEMBER_DECLARATION, stmt, member)
                result.append(member_node)
                result.extend(self._usage_nodes(member.annotations, member_node))
            elif isinstance(stmt, astroid.nodes.FunctionDef):
                method_node = SyntaxNode(NodeKind.METHOD_DECLARATION, stmt)
                result.append(method_node)
                result.extend(self._usage_nodes(self._decorator_usages(stmt), method_node))
        return result

    def _usage_nodes(
        self, usages: tuple[AnnotationUsage, ...], owner: SyntaxNode
    ) -> list[SyntaxNode]:
        return [
            SyntaxNode(NodeKind.ANNOTATION_USAGE, usage.node, usage, owner=owner)
            for usage in usages
        ]

    # ------------------------------------------------------------------ #
    # Declarations
    # ------------------------------------------------------------------ #

    def type_declaration(self, node: astroid.nodes.ClassDef) -> TypeDeclaration:
        members = tuple(
            member
            for member in (self.member_declaration(stmt) for stmt in node.body)
            if member is not None
        )
        return TypeDeclaration(name=node.name, node=node, members=members)

    def member_declaration(self, stmt: astroid.nodes.NodeNG) -> Optional[MemberDeclaration]:
        """Member view of a class-body statement, or None if it declares no member."""
        if isinstance(stmt, astroid.nodes.AnnAssign):
            return self._attribute_member(stmt)
        if isinstance(stmt, astroid.nodes.FunctionDef):
            return self._property_member(stmt)
        return None

    def _attribute_member(self, stmt: astroid.nodes.AnnAssign) -> Optional[MemberDeclaration]:
        if not isinstance(stmt.target, astroid.nodes.AssignName):
            return None
        type_expression, metadata = self.split_annotated(stmt.annotation)
        return MemberDeclaration(
            name=stmt.target.name,
            node=stmt,
            type_expression=type_expression,
            annotations=tuple(self._usage(element) for element in metadata),
        )

    def _property_member(self, stmt: astroid.nodes.FunctionDef) -> Optional[MemberDeclaration]:
        if not stmt.decorators:
            return None
        decorators = stmt.decorators.nodes
        if any(self._is_accessor(d) for d in decorators):
            return None
        property_decorators = [d for d in decorators if self._is_property_decorator(d)]
        if not property_decorators:
            return None
        return MemberDeclaration(
            name=stmt.name,
            node=stmt,
            type_expression=stmt.returns,
            annotations=tuple(
                self._usage(d) for d in decorators if d not in property_decorators
            ),
        )

    def _decorator_usages(
        self, node: astroid.nodes.ClassDef | astroid.nodes.FunctionDef
    ) -> tuple[AnnotationUsage, ...]:
        if not node.decorators:
            return ()
        return tuple(self._usage(d) for d in node.decorators.nodes)

    def _usage(self, node: astroid.nodes.NodeNG) -> AnnotationUsage:
        arguments: tuple[astroid.nodes.NodeNG, ...] = ()
        if isinstance(node, astroid.nodes.Call):
            arguments = tuple(node.args or ()) + tuple(
                kw.value for kw in node.keywords or ()
            )
        return AnnotationUsage(node=node, arguments=arguments)

    def _is_accessor(self, node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node, astroid.nodes.Attribute) and node.attrname in self.ACCESSOR_ATTRS

    def _is_property_decorator(self, node: astroid.nodes.NodeNG) -> bool:
        try:
            for inferred in node.infer():
                if isinstance(inferred, astroid.nodes.ClassDef) and (
                    inferred.qname() in PROPERTY_DECORATORS
                ):
                    return True
        except astroid.InferenceError:
            pass
        return False

    # ------------------------------------------------------------------ #
    # Typing constructs
    # ------------------------------------------------------------------ #

    def typing_construct(self, node: Optional[astroid.nodes.NodeNG]) -> Optional[str]:
        """
        Name of the typing-module object `node` refers to, e.g. 'Annotated'.

        Recognises `from typing import X [as Y]` and `import typing [as t]; t.X`.
        """
        if isinstance(node, astroid.nodes.Name):
            _, assignments = node.lookup(node.name)
            for stmt in assignments:
                if isinstance(stmt, astroid.nodes.ImportFrom) and stmt.modname in TYPING_MODULES:
                    for name, asname in stmt.names:
                        if (asname or name) == node.name:
                            return name
            return None
        if isinstance(node, astroid.nodes.Attribute) and isinstance(node.expr, astroid.nodes.Name):
            _, assignments = node.expr.lookup(node.expr.name)
            for stmt in assignments:
                if isinstance(stmt, astroid.nodes.Import):
                    for name, asname in stmt.names:
                        if (asname or name) == node.expr.name and name in TYPING_MODULES:
                            return node.attrname
        return None

    def subscript_elements(self, node: astroid.nodes.Subscript) -> list[astroid.nodes.NodeNG]:
        if isinstance(node.slice, astroid.nodes.Tuple):
            return list(node.slice.elts)
        return [node.slice]

    def split_annotated(
        self, annotation: Optional[astroid.nodes.NodeNG]
    ) -> tuple[Optional[astroid.nodes.NodeNG], list[astroid.nodes.NodeNG]]:
        """
        Split `Annotated[T, m1, m2]` into (T, [m1, m2]).

        `Optional[Annotated[T, m]]` and `Annotated[T, m] | None` keep the whole
        annotation as the type expression and yield the inner metadata.
        """
        if (
            isinstance(annotation, astroid.nodes.Subscript)
            and self.typing_construct(annotation.value) == "Annotated"
        ):
            elements = self.subscript_elements(annotation)
            return elements[0], elements[1:]
        return annotation, self._nullable_metadata(annotation)

    def _nullable_metadata(
        self, annotation: Optional[astroid.nodes.NodeNG]
    ) -> list[astroid.nodes.NodeNG]:
        if isinstance(annotation, astroid.nodes.BinOp) and annotation.op == "|":
            options = self._flatten_union(annotation)
        elif isinstance(annotation, astroid.nodes.Subscript) and self.typing_construct(
            annotation.value
        ) in ("Optional", "Union"):
            options = self.subscript_elements(annotation)
        else:
            return []
        remaining = [option for option in options if not self._is_none(option)]
        if len(remaining) != 1:
            return []
        inner = remaining[0]
        if (
            isinstance(inner, astroid.nodes.Subscript)
            and self.typing_construct(inner.value) == "Annotated"
        ):
            return self.subscript_elements(inner)[1:]
        return []

    def unwrap_declared_type(
        self, node: Optional[astroid.nodes.NodeNG]
    ) -> tuple[Optional[astroid.nodes.NodeNG], bool]:
        """
        Strip Annotated and nullability wrappers from a declared type.

        Returns (core expression, nullable). The core is None when the type is
        a union of several non-None types or a string forward reference.
        """
        nullable = False
        while node is not None:
            if isinstance(node, astroid.nodes.Const) and isinstance(node.value, str):
                return None, nullable
            if isinstance(node, astroid.nodes.BinOp) and node.op == "|":
                options = self._flatten_union(node)
            elif isinstance(node, astroid.nodes.Subscript):
                construct = self.typing_construct(node.value)
                if construct == "Annotated":
                    node = self.subscript_elements(node)[0]
                    continue
                if construct == "Optional":
                    nullable = True
                    node = self.subscript_elements(node)[0]
                    continue
                if construct != "Union":
                    return node, nullable
                options = self.subscript_elements(node)
            else:
                return node, nullable

            remaining = [option for option in options if not self._is_none(option)]
            if len(remaining) != 1:
                return None, nullable
            nullable = nullable or len(remaining) < len(options)
            node = remaining[0]
        return None, nullable

    def _flatten_union(self, node: astroid.nodes.NodeNG) -> list[astroid.nodes.NodeNG]:
        if isinstance(node, astroid.nodes.BinOp) and node.op == "|":
            return self._flatten_union(node.left) + self._flatten_union(node.right)
        return [node]

    def _is_none(self, node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node, astroid.nodes.Const) and node.value is None

    # ------------------------------------------------------------------ #
    # Modules
    # ------------------------------------------------------------------ #

    def has_source(self, node: astroid.nodes.NodeNG) -> bool:
        """True when the node's module is Python source, not a stub or compiled module."""
        root = node.root()
        if not isinstance(root, astroid.nodes.Module):
            return False
        if not getattr(root, "pure_python", False):
            return False
        return not str(getattr(root, "file", "") or "").endswith(".pyi")

    def is_generated(self, module: astroid.nodes.Module) -> bool:
        """True when the module header carries a generated-code marker."""
        try:
            stream = module.stream()
        except (OSError, AttributeError):
            return False
        if stream is None:
            return False
        with stream:
            for index, raw in enumerate(stream):
                if index >= GENERATED_HEADER_LINES:
                    break
                line = raw.decode("utf-8", errors="replace")
                if any(marker in line for marker in GENERATED_MARKERS):
                    logger.debug("%s is generated code", module.name)
                    return True
        return False
