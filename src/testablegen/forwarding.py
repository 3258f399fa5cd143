"""Builds the call a peer uses to forward to the original function."""

from __future__ import annotations

from dataclasses import dataclass

from .signature import EffectQualifiers, FunctionSignature, LabelKind, Parameter

# (is_asynchronous, is_failable) -> prefix the call needs
CALL_PREFIXES: dict[tuple[bool, bool], str] = {
    (False, False): "",
    (False, True): "try ",
    (True, False): "await ",
    (True, True): "try await ",
}


@dataclass(frozen=True)
class ForwardingCall:
    arguments: tuple[str, ...]
    prefix: str

    @property
    def argument_list(self) -> str:
        return ", ".join(self.arguments)

    def expression(self, callee: str) -> str:
        return f"{self.prefix}{callee}({self.argument_list})"


def call_prefix(effects: EffectQualifiers) -> str:
    return CALL_PREFIXES[(effects.is_asynchronous, effects.is_failable)]


def forwarding_argument(parameter: Parameter) -> str:
    """Render one call argument, keeping the label the original declared."""
    value = f"&{parameter.internal_name}" if parameter.is_inout else parameter.internal_name
    if parameter.label_kind is LabelKind.POSITIONAL:
        return value
    return f"{parameter.external_label}: {value}"


def build_call(signature: FunctionSignature) -> ForwardingCall:
    """
    Derive the forwarding call for a signature.

    Arguments follow declaration order one-for-one; nothing is reordered or merged.
    """
    arguments = tuple(forwarding_argument(parameter) for parameter in signature.parameters)
    return ForwardingCall(arguments, call_prefix(signature.effect_qualifiers))
