"""Errors raised while expanding testable peers.

Every error is scoped to a single declaration. The expansion pass turns them
into diagnostics and moves on to the next marker.
"""

from typing import Optional


class TestableDeclError(Exception):
    """Base class for declaration-scoped expansion failures."""

    __test__ = False  # not a pytest test class

    def __init__(self, description: str, *, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(description)
        self.description = description
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return self.description


class NotAFunction(TestableDeclError):
    """The marker was attached to something other than a function."""

    def __init__(self, marker: str = "Testable", **kwargs):
        super().__init__(f"@{marker} can only be applied to a function.", **kwargs)
        self.marker = marker


class NotPrivate(TestableDeclError):
    """A private-only marker was attached to a function without restricted visibility."""

    def __init__(self, marker: str = "PrivateTestable", **kwargs):
        super().__init__(f"@{marker} can only be applied to a private function.", **kwargs)
        self.marker = marker


class SwiftSyntaxError(TestableDeclError):
    """The declaration following a marker could not be parsed."""
