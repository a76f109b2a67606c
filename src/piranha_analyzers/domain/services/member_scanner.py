"""Member scanning of a type declaration."""

from typing import TYPE_CHECKING

from piranha_analyzers.domain.services.annotation_matcher import AnnotationMatcher

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import (
        MemberDeclaration,
        TypeDeclaration,
        TypeIdentity,
    )
    from piranha_analyzers.domain.protocols import SymbolResolverProtocol


class MemberScanner:
    """Enumerates the members of a class that carry a given marker annotation."""

    def __init__(
        self,
        resolver: "SymbolResolverProtocol",
        matcher: AnnotationMatcher | None = None,
    ) -> None:
        self._matcher = matcher or AnnotationMatcher(resolver)

    def marked_members(
        self, declaration: "TypeDeclaration", marker: "TypeIdentity"
    ) -> tuple["MemberDeclaration", ...]:
        """Members of `declaration`, in declaration order, annotated with `marker`."""
        return tuple(
            member
            for member in declaration.members
            if self._matcher.has_annotation(member, marker)
        )
