"""Synthesizes the testable peer declaration for a function signature.

Two strategies are available and must agree byte-for-byte:

- `InterpolationSynthesizer` writes the declaration with one f-string.
- `TemplateSynthesizer` fills a `DeclarationFields` record and renders it
  through a fixed template in a single formatting step.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .forwarding import ForwardingCall
from .signature import FunctionSignature

TESTABLE_PREFIX = "testable"
DEFAULT_VISIBILITY = "public"
DEFAULT_INDENT = "    "


def derived_identifier(name: str) -> str:
    """Return the peer's name: `myMethod` -> `testableMyMethod`.

    Backticks around an escaped identifier are dropped since the derived name
    is never a keyword.
    """
    bare = name.strip("`")
    if not bare:
        raise ValueError("cannot derive a testable name from an empty identifier")
    return TESTABLE_PREFIX + bare[0].upper() + bare[1:]


def documentation_comment(name: str) -> str:
    return f"/// Testing wrapper for {name}."


def _clause(text: str) -> str:
    return f" {text}" if text else ""


@dataclass(frozen=True)
class SynthesizedDeclaration:
    identifier: str
    original_name: str
    visibility: str
    documentation: str
    signature: FunctionSignature
    call: ForwardingCall
    text: str


class Synthesizer(ABC):
    """Base class for the peer declaration renderers."""

    name: str

    def synthesize(
        self,
        signature: FunctionSignature,
        call: ForwardingCall,
        visibility: str = DEFAULT_VISIBILITY,
        indent: str = DEFAULT_INDENT,
    ) -> SynthesizedDeclaration:
        return SynthesizedDeclaration(
            identifier=derived_identifier(signature.name),
            original_name=signature.name,
            visibility=visibility,
            documentation=documentation_comment(signature.name),
            signature=signature,
            call=call,
            text=self.render(signature, call, visibility, indent),
        )

    @abstractmethod
    def render(self, signature: FunctionSignature, call: ForwardingCall, visibility: str, indent: str) -> str:
        """Return the peer declaration's source text, without the build-flag guard."""


class InterpolationSynthesizer(Synthesizer):
    name = "interpolation"

    def render(self, signature: FunctionSignature, call: ForwardingCall, visibility: str, indent: str) -> str:
        modifiers = "".join(f"{modifier} " for modifier in signature.retained_modifiers)
        return f"""{documentation_comment(signature.name)}
{visibility} {modifiers}func {derived_identifier(signature.name)}{signature.generic_parameters}({signature.parameter_text}){_clause(signature.effect_text)}{_clause(signature.return_clause)}{_clause(signature.generic_where_clause)} {{
{indent}{call.expression(signature.name)}
}}"""


@dataclass(frozen=True)
class DeclarationFields:
    """Tagged fields of a peer declaration, one per template slot."""

    documentation: str
    visibility: str
    modifiers: str
    identifier: str
    generic: str
    parameters: str
    effects: str
    return_clause: str
    where_clause: str
    indent: str
    body: str

    @classmethod
    def from_signature(
        cls, signature: FunctionSignature, call: ForwardingCall, visibility: str, indent: str
    ) -> DeclarationFields:
        return cls(
            documentation=documentation_comment(signature.name),
            visibility=visibility,
            modifiers="".join(f"{modifier} " for modifier in signature.retained_modifiers),
            identifier=derived_identifier(signature.name),
            generic=signature.generic_parameters,
            parameters=signature.parameter_text,
            effects=_clause(signature.effect_text),
            return_clause=_clause(signature.return_clause),
            where_clause=_clause(signature.generic_where_clause),
            indent=indent,
            body=call.expression(signature.name),
        )


class TemplateSynthesizer(Synthesizer):
    name = "template"

    TEMPLATE = (
        "{documentation}\n"
        "{visibility} {modifiers}func {identifier}{generic}({parameters}){effects}{return_clause}{where_clause} {{\n"
        "{indent}{body}\n"
        "}}"
    )

    def render(self, signature: FunctionSignature, call: ForwardingCall, visibility: str, indent: str) -> str:
        fields = DeclarationFields.from_signature(signature, call, visibility, indent)
        # format_map never re-scans substituted values, so braces in clauses are safe
        return self.TEMPLATE.format_map(dataclasses.asdict(fields))


SYNTHESIZERS: dict[str, type[Synthesizer]] = {
    InterpolationSynthesizer.name: InterpolationSynthesizer,
    TemplateSynthesizer.name: TemplateSynthesizer,
}


def get_synthesizer(name: str) -> Synthesizer:
    try:
        return SYNTHESIZERS[name]()
    except KeyError:
        raise ValueError(f"Unknown synthesis strategy: {name!r} (expected one of {sorted(SYNTHESIZERS)})")
