"""Structural signature model extracted from a function declaration."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .syntax.nodes import FunctionDecl, ParameterNode

WILDCARD_LABEL = "_"
INOUT_SPECIFIER = "inout"

# Modifiers that change how the original is called, so the peer must repeat them
# for its forwarding call to resolve.
RETAINED_MODIFIERS = ("static", "class", "mutating", "nonisolated")


class LabelKind(enum.Enum):
    POSITIONAL = "positional"  # `_ value: Int`
    SAME = "same"  # `value: Int`
    DISTINCT = "distinct"  # `with value: Int`


@dataclass(frozen=True)
class Parameter:
    """A parameter as seen from the call site.

    `external_label` is None for positional parameters. `is_inout` parameters
    are passed with `&` at the call site.
    """

    external_label: Optional[str]
    internal_name: str
    trailing_separator: Optional[str] = None
    is_inout: bool = False

    @property
    def label_kind(self) -> LabelKind:
        if self.external_label is None:
            return LabelKind.POSITIONAL
        if self.external_label == self.internal_name:
            return LabelKind.SAME
        return LabelKind.DISTINCT

    @classmethod
    def from_node(cls, node: ParameterNode) -> Parameter:
        is_inout = INOUT_SPECIFIER in node.type_text.split()
        if node.second_name is None:
            if node.first_name == WILDCARD_LABEL:
                return cls(None, node.first_name, node.trailing_comma, is_inout)
            return cls(node.first_name, node.first_name, node.trailing_comma, is_inout)
        label = None if node.first_name == WILDCARD_LABEL else node.first_name
        return cls(label, node.second_name, node.trailing_comma, is_inout)


@dataclass(frozen=True)
class EffectQualifiers:
    is_asynchronous: bool = False
    is_failable: bool = False


@dataclass(frozen=True)
class FunctionSignature:
    """Everything the peer generator needs to know about the original function.

    Clause fields hold the source text exactly as written (empty string when
    the clause is absent) so the peer's external shape matches the original.
    """

    name: str
    generic_parameters: str
    parameters: tuple[Parameter, ...]
    effect_qualifiers: EffectQualifiers
    effect_text: str = ""
    return_clause: str = ""
    generic_where_clause: str = ""
    parameter_text: str = ""
    retained_modifiers: tuple[str, ...] = ()

    @property
    def returns_value(self) -> bool:
        return bool(self.return_clause)


def extract(function: FunctionDecl) -> FunctionSignature:
    """
    Build the signature model for a function declaration.

    Args:
        function: A parsed `func` declaration that already passed validation

    Returns:
        A FunctionSignature; extracting the same declaration twice gives equal values
    """
    effects = function.effect_specifiers
    qualifiers = EffectQualifiers(
        is_asynchronous=bool(effects and effects.async_specifier),
        is_failable=bool(effects and effects.throws_specifier),
    )
    retained = tuple(m.name for m in function.modifiers if m.name in RETAINED_MODIFIERS)

    return FunctionSignature(
        name=function.name or "",
        generic_parameters=function.generic_parameter_clause,
        parameters=tuple(Parameter.from_node(node) for node in function.parameters),
        effect_qualifiers=qualifiers,
        effect_text=effects.text if effects else "",
        return_clause=function.return_clause,
        generic_where_clause=function.generic_where_clause,
        parameter_text=function.parameter_clause_text,
        retained_modifiers=retained,
    )
