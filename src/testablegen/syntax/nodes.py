"""Syntax nodes produced by the declaration parser.

Nodes keep source offsets and verbatim text slices rather than a full tree:
the peer generator copies clauses through unchanged, so the exact spelling
matters more than structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Attribute:
    name: str
    text: str
    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True)
class Modifier:
    name: str
    detail: Optional[str] = None  # e.g. "set" in `private(set)`

    @property
    def text(self) -> str:
        if self.detail is None:
            return self.name
        return f"{self.name}({self.detail})"


@dataclass(frozen=True)
class ParameterNode:
    """One entry of a function's parameter clause.

    `second_name` is only set when two names were written, e.g. `with value`
    or `_ value`.
    """

    first_name: str
    second_name: Optional[str]
    type_text: str
    default_text: Optional[str] = None
    trailing_comma: Optional[str] = None


@dataclass(frozen=True)
class EffectSpecifiers:
    async_specifier: Optional[str] = None
    throws_specifier: Optional[str] = None  # "throws", "rethrows" or "throws(E)"
    text: str = ""


@dataclass
class Declaration:
    """A declaration found after an attribute.

    `kind` is the introducer keyword (`func`, `struct`, `var`, ...).
    """

    kind: str
    start: int
    end: int
    line: int
    column: int
    name: Optional[str] = None
    attributes: list[Attribute] = field(default_factory=list)
    modifiers: list[Modifier] = field(default_factory=list)

    @property
    def is_function(self) -> bool:
        return False

    def has_modifier(self, *names: str) -> bool:
        return any(modifier.name in names for modifier in self.modifiers)


@dataclass
class FunctionDecl(Declaration):
    generic_parameter_clause: str = ""
    parameter_clause_text: str = ""
    parameters: list[ParameterNode] = field(default_factory=list)
    effect_specifiers: Optional[EffectSpecifiers] = None
    return_clause: str = ""
    return_type: str = ""
    generic_where_clause: str = ""
    has_body: bool = False

    @property
    def is_function(self) -> bool:
        return True
