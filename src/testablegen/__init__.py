from .config import ExpansionConfig
from .exceptions import NotAFunction, NotPrivate, SwiftSyntaxError, TestableDeclError
from .expansion import Diagnostic, Expansion, expand_source
from .transformer import (
    PeerTransformer,
    TransformerRegistry,
    default_registry,
    make_private_testable,
    make_testable,
)

__all__ = [
    "Diagnostic",
    "Expansion",
    "ExpansionConfig",
    "NotAFunction",
    "NotPrivate",
    "PeerTransformer",
    "SwiftSyntaxError",
    "TestableDeclError",
    "TransformerRegistry",
    "default_registry",
    "expand_source",
    "make_private_testable",
    "make_testable",
]
