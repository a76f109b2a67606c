"""Annotation matching against a target marker identity."""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from piranha_analyzers.domain.entities import (
        AnnotationUsage,
        MemberDeclaration,
        TypeIdentity,
    )
    from piranha_analyzers.domain.protocols import SymbolResolverProtocol


class AnnotationMatcher:
    """
    Finds annotation usages on a member whose converted type is a given marker.

    Usages are examined in source order; the first match wins in
    find_annotation(), not the best one.
    """

    def __init__(self, resolver: "SymbolResolverProtocol") -> None:
        self._resolver = resolver

    def iter_matching(
        self, member: "MemberDeclaration", target: "TypeIdentity"
    ) -> Iterator["AnnotationUsage"]:
        for usage in member.annotations:
            converted = self._resolver.converted_identity(usage)
            if self._resolver.same_identity(target, converted):
                yield usage

    def find_annotation(
        self, member: "MemberDeclaration", target: "TypeIdentity"
    ) -> Optional["AnnotationUsage"]:
        return next(self.iter_matching(member, target), None)

    def has_annotation(self, member: "MemberDeclaration", target: "TypeIdentity") -> bool:
        return self.find_annotation(member, target) is not None
