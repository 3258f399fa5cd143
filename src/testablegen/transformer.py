"""Transformer entry points and the marker registry.

A transformer turns one declaration into the peer declarations to splice
next to it. The two shipped variants differ only in their eligibility policy:

    @Testable         any function
    @PrivateTestable  only `private` / `fileprivate` functions

Markers are looked up in a `TransformerRegistry` by the expansion pass, so new
markers can be added without touching the discovery code.
"""

from __future__ import annotations

import logging
from typing import Optional

from typing_extensions import Protocol, Self, runtime_checkable

from .config import ExpansionConfig
from .eligibility import AnyFunctionPolicy, EligibilityPolicy, PrivateOnlyPolicy
from .exceptions import NotAFunction
from .forwarding import build_call
from .guard import wrap
from .signature import extract
from .synthesis import SynthesizedDeclaration, get_synthesizer
from .syntax.nodes import Declaration, FunctionDecl

logger = logging.getLogger(__name__)

TESTABLE_MARKER = "Testable"
PRIVATE_TESTABLE_MARKER = "PrivateTestable"


@runtime_checkable
class DeclarationTransformer(Protocol):
    marker: str

    def transform(self, declaration: Declaration) -> list[str]: ...


class PeerTransformer:
    """Synthesizes a guarded, differently-visible forwarding peer for a function.

    Args:
        marker: Attribute name this transformer answers to
        policy: Eligibility check run before anything is extracted
        config: Expansion settings (visibility, build flag, strategy, indent)
    """

    def __init__(self, marker: str, policy: EligibilityPolicy, config: Optional[ExpansionConfig] = None):
        self.marker = marker
        self.policy = policy
        self.config = config or ExpansionConfig()
        self.synthesizer = get_synthesizer(self.config.strategy)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.marker!r}, {type(self.policy).__name__})"

    def synthesize(self, declaration: Declaration) -> SynthesizedDeclaration:
        """Validate `declaration` and build its peer, without the build-flag guard.

        Raises:
            NotAFunction: If the declaration is not a function
            NotPrivate: If the policy requires restricted visibility and it is missing
        """
        self.policy.validate(declaration, self.marker)
        if not isinstance(declaration, FunctionDecl):
            raise NotAFunction(self.marker, line=declaration.line, column=declaration.column)
        signature = extract(declaration)
        call = build_call(signature)
        return self.synthesizer.synthesize(signature, call, self.config.visibility, self.config.indent)

    def transform(self, declaration: Declaration) -> list[str]:
        """Return the peer declarations for `declaration`: exactly one on success."""
        synthesized = self.synthesize(declaration)
        logger.debug("@%s: %s -> %s", self.marker, synthesized.original_name, synthesized.identifier)
        return [wrap(synthesized.text, self.config.build_flag)]


def make_testable(config: Optional[ExpansionConfig] = None) -> PeerTransformer:
    return PeerTransformer(TESTABLE_MARKER, AnyFunctionPolicy(), config)


def make_private_testable(config: Optional[ExpansionConfig] = None) -> PeerTransformer:
    return PeerTransformer(PRIVATE_TESTABLE_MARKER, PrivateOnlyPolicy(), config)


class TransformerRegistry:
    """Maps marker names to the transformer that expands them."""

    def __init__(self):
        self._transformers: dict[str, DeclarationTransformer] = {}

    def register(self, transformer: DeclarationTransformer, marker: Optional[str] = None) -> Self:
        name = marker or transformer.marker
        if name in self._transformers:
            raise ValueError(f"Marker @{name} is already registered")
        self._transformers[name] = transformer
        return self

    def get(self, marker: str) -> DeclarationTransformer:
        try:
            return self._transformers[marker]
        except KeyError:
            raise KeyError(f"No transformer registered for @{marker}")

    @property
    def markers(self) -> frozenset[str]:
        return frozenset(self._transformers)

    def __contains__(self, marker: str) -> bool:
        return marker in self._transformers

    def __len__(self) -> int:
        return len(self._transformers)


def default_registry(config: Optional[ExpansionConfig] = None) -> TransformerRegistry:
    """Registry with both shipped markers, sharing one config."""
    return TransformerRegistry().register(make_testable(config)).register(make_private_testable(config))
