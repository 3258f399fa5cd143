"""Eligibility policies deciding which declarations a transformer accepts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .exceptions import NotAFunction, NotPrivate
from .syntax.nodes import Declaration

RESTRICTED_VISIBILITY = frozenset({"private", "fileprivate"})


class EligibilityPolicy(ABC):
    """Base class for the checks run before a peer is synthesized."""

    @abstractmethod
    def validate(self, declaration: Declaration, marker: str) -> None:
        """Raise a TestableDeclError if `declaration` is not eligible.

        Args:
            declaration: The declaration the marker was attached to
            marker: Marker name, used in the error description
        """


class AnyFunctionPolicy(EligibilityPolicy):
    """Accepts every function declaration."""

    def validate(self, declaration: Declaration, marker: str) -> None:
        if not declaration.is_function:
            raise NotAFunction(marker, line=declaration.line, column=declaration.column)


class PrivateOnlyPolicy(AnyFunctionPolicy):
    """Accepts only functions with a restricted visibility modifier."""

    def validate(self, declaration: Declaration, marker: str) -> None:
        super().validate(declaration, marker)
        # `private(set)` only restricts a setter
        if not any(m.name in RESTRICTED_VISIBILITY and m.detail is None for m in declaration.modifiers):
            raise NotPrivate(marker, line=declaration.line, column=declaration.column)
