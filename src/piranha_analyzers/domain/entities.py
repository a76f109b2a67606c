"""Domain entities: type identities, syntax views, rule descriptors and diagnostics."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

import astroid


@dataclass(frozen=True)
class TypeIdentity:
    """
    Canonical handle of a resolved class.

    Equality of the dataclass is exact; rules compare with same_identity(),
    which ignores nullability. `node` is the resolved class, kept outside
    equality so caches can tell apart same-named classes of different files.
    """

    qname: str
    nullable: bool = False
    node: Optional[astroid.nodes.ClassDef] = field(
        default=None, compare=False, repr=False, hash=False
    )

    def normalized(self) -> "TypeIdentity":
        """Return the identity with nullability metadata stripped."""
        if not self.nullable:
            return self
        return replace(self, nullable=False)

    @property
    def short_name(self) -> str:
        """Qualified-name tail after the last separator."""
        return self.qname.rsplit(".", 1)[-1]


def same_identity(a: TypeIdentity, b: Optional[TypeIdentity]) -> bool:
    """Nullability-insensitive comparison. An unresolved right-hand side never matches."""
    if b is None:
        return False
    return a.normalized() == b.normalized()


@dataclass(frozen=True)
class SourceLocation:
    """File and span of a syntax node."""

    path: str
    line: int
    column: int
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    node: Optional[astroid.nodes.NodeNG] = field(
        default=None, compare=False, repr=False, hash=False
    )

    @classmethod
    def from_node(cls, node: astroid.nodes.NodeNG) -> "SourceLocation":
        root = node.root()
        path = getattr(root, "file", None) or getattr(root, "name", "") or "<unknown>"
        return cls(
            path=str(path),
            line=getattr(node, "lineno", None) or 0,
            column=getattr(node, "col_offset", None) or 0,
            end_line=getattr(node, "end_lineno", None),
            end_column=getattr(node, "end_col_offset", None),
            node=node,
        )

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


class NodeKind(Enum):
    """Syntax node kinds rules can register for."""

    TYPE_DECLARATION = "type-declaration"
    MEMBER_DECLARATION = "member-declaration"
    METHOD_DECLARATION = "method-declaration"
    ANNOTATION_USAGE = "annotation-usage"


@dataclass(frozen=True)
class AnnotationUsage:
    """One marker applied to a declaration (Annotated metadata element or decorator)."""

    node: astroid.nodes.NodeNG
    arguments: tuple[astroid.nodes.NodeNG, ...] = ()

    @property
    def location(self) -> SourceLocation:
        return SourceLocation.from_node(self.node)


@dataclass(frozen=True)
class MemberDeclaration:
    """A named, typed member of a class: annotated attribute or property."""

    name: str
    node: astroid.nodes.NodeNG
    type_expression: Optional[astroid.nodes.NodeNG]
    annotations: tuple[AnnotationUsage, ...] = ()

    @property
    def location(self) -> SourceLocation:
        return SourceLocation.from_node(self.node)


@dataclass(frozen=True)
class TypeDeclaration:
    """A class holding an ordered collection of member declarations."""

    name: str
    node: astroid.nodes.ClassDef
    members: tuple[MemberDeclaration, ...] = ()


@dataclass(frozen=True)
class SyntaxNode:
    """
    Kind-tagged view over an astroid node, produced by the syntax walker.

    `declaration` holds the MemberDeclaration / TypeDeclaration / AnnotationUsage
    for the kinds that have one; `owner` is the owning declaration's SyntaxNode
    for annotation usages.
    """

    kind: NodeKind
    node: astroid.nodes.NodeNG
    declaration: object = None
    owner: Optional["SyntaxNode"] = None

    @property
    def location(self) -> SourceLocation:
        return SourceLocation.from_node(self.node)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class DiagnosticRule:
    """Immutable rule descriptor, defined once per rule."""

    rule_id: str
    title: str
    message_template: str
    category: str
    severity: Severity
    enabled_by_default: bool = True
    description: str = ""
    symbol: str = ""
    pylint_msgid: str = ""

    def format_message(self, args: tuple[str, ...] = ()) -> str:
        """Apply positional arguments to the %-style template."""
        if not args:
            return self.message_template
        return self.message_template % tuple(args)


@dataclass(frozen=True)
class Diagnostic:
    """A produced finding."""

    rule_id: str
    message: str
    location: SourceLocation
    severity: Severity

    @property
    def sort_key(self) -> tuple[str, int, int, str]:
        return (self.location.path, self.location.line, self.location.column, self.rule_id)

    def to_dict(self) -> dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.location.path,
            "line": self.location.line,
            "column": self.location.column,
            "end_line": self.location.end_line,
            "end_column": self.location.end_column,
        }


@dataclass(frozen=True)
class UnitResult:
    """Outcome of one pass over one compilation unit."""

    path: str
    diagnostics: tuple[Diagnostic, ...] = ()
    cancelled: bool = False
    skipped: bool = False
    reason: Optional[str] = None


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregated, unordered result of analyzing a set of units."""

    units: tuple[UnitResult, ...] = ()

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(d for unit in self.units for d in unit.diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def sorted_diagnostics(self) -> list[Diagnostic]:
        """Diagnostics sorted by location for display."""
        return sorted(self.diagnostics, key=lambda d: d.sort_key)
