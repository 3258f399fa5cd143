"""Expansion pass over a Swift source file.

Finds every attribute naming a registered marker, hands the declaration that
follows it to the marker's transformer and splices the returned peers right
after the original declaration. Failures are collected as diagnostics; they
never stop the pass and never leave a half-expanded declaration behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import ExpansionConfig
from .exceptions import TestableDeclError
from .syntax.lexer import tokenize
from .syntax.parser import Parser
from .transformer import TransformerRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line: int
    column: int
    marker: str
    path: Optional[str] = None

    def format(self) -> str:
        location = f"{self.path}:" if self.path else ""
        return f"{location}{self.line}:{self.column}: error: {self.message}"


@dataclass(frozen=True)
class _Edit:
    start: int
    end: int
    replacement: str


@dataclass
class Expansion:
    """Result of expanding one source file."""

    original: str
    source: str
    peers: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    markers_found: int = 0

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def changed(self) -> bool:
        return self.source != self.original


def _line_indent(source: str, offset: int) -> str:
    line_start = source.rfind("\n", 0, offset) + 1
    prefix = source[line_start:offset]
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def _indent_block(text: str, indent: str) -> str:
    if not indent:
        return text
    return "\n".join(indent + line if line.strip() else line for line in text.split("\n"))


def _apply_edits(source: str, edits: list[_Edit]) -> str:
    result = source
    for edit in sorted(edits, key=lambda e: (e.start, e.end), reverse=True):
        result = result[: edit.start] + edit.replacement + result[edit.end :]
    return result


def expand_source(
    source: str,
    registry: Optional[TransformerRegistry] = None,
    config: Optional[ExpansionConfig] = None,
    path: Optional[str] = None,
) -> Expansion:
    """
    Expand every registered marker in `source`.

    Args:
        source: Swift source text
        registry: Marker registry; defaults to `default_registry(config)`
        config: Expansion settings; only `strip_markers` is read here, the rest
            is carried by the registry's transformers
        path: File name used in diagnostics

    Returns:
        Expansion holding the rewritten source, the peers and any diagnostics
    """
    config = config or ExpansionConfig()
    if registry is None:
        registry = default_registry(config)

    tokens = tokenize(source)
    parser = Parser(source, tokens)
    expansion = Expansion(original=source, source=source)
    edits: list[_Edit] = []

    for index in parser.iter_attributes(registry.markers):
        at = tokens[index]
        marker = tokens[index + 1].value
        expansion.markers_found += 1
        logger.debug("Found @%s at %s:%d:%d", marker, path or "<source>", at.line, at.column)

        try:
            declaration = parser.parse_declaration(index)
            peers = registry.get(marker).transform(declaration)
        except TestableDeclError as exc:
            diagnostic = Diagnostic(
                exc.description,
                exc.line if exc.line is not None else at.line,
                exc.column if exc.column is not None else at.column,
                marker,
                path,
            )
            logger.info(diagnostic.format())
            expansion.diagnostics.append(diagnostic)
            continue

        if config.strip_markers:
            attribute = declaration.attributes[0]
            following = next(token for token in tokens[index:] if token.start >= attribute.end)
            edits.append(_Edit(attribute.start, following.start, ""))

        indent = _line_indent(source, at.start)
        block = "".join("\n\n" + _indent_block(peer, indent) for peer in peers)
        edits.append(_Edit(declaration.end, declaration.end, block))
        expansion.peers.extend(peers)

    expansion.source = _apply_edits(source, edits)
    return expansion
