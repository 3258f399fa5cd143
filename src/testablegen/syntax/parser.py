"""
Declaration parser for Swift source code.

This is not a general Swift parser. It reads the declaration that follows an
attribute far enough to know its kind, its modifiers and, for functions, each
clause of the signature plus the extent of the body.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from ..exceptions import SwiftSyntaxError
from .lexer import tokenize
from .nodes import Attribute, Declaration, EffectSpecifiers, FunctionDecl, Modifier, ParameterNode
from .tokens import DECLARATION_INTRODUCERS, Token, TokenType

MODIFIER_WORDS = frozenset(
    {
        "open",
        "public",
        "package",
        "internal",
        "fileprivate",
        "private",
        "static",
        "class",
        "final",
        "override",
        "required",
        "convenience",
        "mutating",
        "nonmutating",
        "nonisolated",
        "isolated",
        "distributed",
        "dynamic",
        "optional",
        "lazy",
        "weak",
        "unowned",
        "indirect",
        "prefix",
        "postfix",
        "infix",
        "consuming",
        "borrowing",
    }
)

_OPENERS = {TokenType.LPAREN: TokenType.RPAREN, TokenType.LBRACKET: TokenType.RBRACKET, TokenType.LANGLE: TokenType.RANGLE}
_CLOSERS = frozenset(_OPENERS.values())


class Parser:
    """
    Parses declarations out of a token stream.

    The parser works on demand: `parse_declaration(index)` reads one
    declaration starting at `index`, which must point at its first attribute,
    modifier or introducer keyword.
    """

    def __init__(self, source: str, tokens: Optional[List[Token]] = None):
        self.source = source
        self.tokens = tokens if tokens is not None else tokenize(source)
        self.pos = 0

    # -- token helpers ------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        pos = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[pos]

    def advance(self) -> Token:
        token = self.peek()
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def expect(self, token_type: TokenType, what: str) -> Token:
        token = self.peek()
        if token.type is not token_type:
            raise self.error(f"expected {what}, found '{token.value or 'end of file'}'", token)
        return self.advance()

    def error(self, message: str, token: Optional[Token] = None) -> SwiftSyntaxError:
        token = token or self.peek()
        return SwiftSyntaxError(message, line=token.line, column=token.column)

    def adjacent(self) -> bool:
        """True if the current token directly follows the previous one with no whitespace."""
        if self.pos == 0:
            return False
        return self.tokens[self.pos - 1].end == self.peek().start

    def skip_balanced(self) -> Token:
        """Consume a bracketed group starting at the current opener and return its closer."""
        opener = self.advance()
        closer_type = _OPENERS[opener.type]
        depth = 1
        while depth:
            token = self.advance()
            if token.type is TokenType.EOF:
                raise self.error(f"unbalanced '{opener.value}'", opener)
            if token.type is opener.type:
                depth += 1
            elif token.type is closer_type:
                depth -= 1
        return token

    def skip_block(self) -> Token:
        """Consume a `{ ... }` block and return the closing brace."""
        opener = self.expect(TokenType.LBRACE, "'{'")
        depth = 1
        while depth:
            token = self.advance()
            if token.type is TokenType.EOF:
                raise self.error("unbalanced '{'", opener)
            if token.type is TokenType.LBRACE:
                depth += 1
            elif token.type is TokenType.RBRACE:
                depth -= 1
        return token

    def text(self, start: int, end: int) -> str:
        return self.source[start:end]

    # -- declarations -------------------------------------------------------

    def iter_attributes(self, names: frozenset[str]) -> Iterator[int]:
        """Yield the token index of every `@Name` attribute whose name is in `names`."""
        for index, token in enumerate(self.tokens[:-1]):
            if token.type is not TokenType.AT:
                continue
            following = self.tokens[index + 1]
            if following.type is TokenType.IDENTIFIER and following.start == token.end and following.value in names:
                yield index

    def parse_attribute(self) -> Attribute:
        at = self.expect(TokenType.AT, "'@'")
        name_token = self.peek()
        if name_token.type not in (TokenType.IDENTIFIER, TokenType.KEYWORD) or not self.adjacent():
            raise self.error("expected an attribute name after '@'", at)
        self.advance()
        name = name_token.value
        end = name_token.end
        while self.match(TokenType.DOT) and self.adjacent():
            self.advance()
            part = self.expect(TokenType.IDENTIFIER, "attribute name")
            name += "." + part.value
            end = part.end
        if self.match(TokenType.LANGLE) and self.adjacent():
            end = self.skip_balanced().end
        if self.match(TokenType.LPAREN) and self.adjacent():
            end = self.skip_balanced().end
        return Attribute(name, self.text(at.start, end), at.start, end, at.line, at.column)

    def is_modifier(self, token: Token, following: Token) -> bool:
        if token.value not in MODIFIER_WORDS:
            return False
        if token.type is TokenType.KEYWORD:
            # `class` is only a modifier in front of another declaration keyword
            return following.value in MODIFIER_WORDS or following.value in DECLARATION_INTRODUCERS
        return token.type is TokenType.IDENTIFIER

    def parse_modifier(self) -> Modifier:
        name = self.advance().value
        detail = None
        if self.match(TokenType.LPAREN) and self.adjacent():
            start = self.advance().end
            closer = self.expect(TokenType.IDENTIFIER, "modifier detail")
            self.expect(TokenType.RPAREN, "')'")
            detail = self.text(start, closer.end).strip()
        return Modifier(name, detail)

    def parse_declaration(self, index: Optional[int] = None) -> Declaration:
        """
        Parse the declaration starting at `index` (defaults to the current position).

        Returns:
            A FunctionDecl for `func` declarations, a plain Declaration otherwise.

        Raises:
            SwiftSyntaxError: If no declaration follows or a function clause is malformed.
        """
        if index is not None:
            self.pos = index
        first = self.peek()

        attributes = []
        while self.match(TokenType.AT):
            attributes.append(self.parse_attribute())

        modifiers = []
        while self.is_modifier(self.peek(), self.peek(1)):
            modifiers.append(self.parse_modifier())

        introducer = self.peek()
        if introducer.type is not TokenType.KEYWORD or introducer.value not in DECLARATION_INTRODUCERS:
            raise self.error(f"expected a declaration, found '{introducer.value or 'end of file'}'", introducer)
        self.advance()

        if introducer.value == "func":
            decl = self.parse_function_rest(first)
        else:
            name = None
            if self.match(TokenType.IDENTIFIER):
                name = self.peek().value
            decl = Declaration(introducer.value, first.start, introducer.end, first.line, first.column, name)

        decl.attributes = attributes
        decl.modifiers = modifiers
        return decl

    def parse_function_rest(self, first: Token) -> FunctionDecl:
        name_token = self.peek()
        if name_token.type is not TokenType.IDENTIFIER:
            # operator functions have no identifier to derive a wrapper name from
            raise self.error("expected a function name", name_token)
        self.advance()

        generic_clause = ""
        if self.match(TokenType.LANGLE):
            opener = self.peek()
            closer = self.skip_balanced()
            generic_clause = self.text(opener.start, closer.end)

        lparen = self.expect(TokenType.LPAREN, "'(' to open the parameter clause")
        parameters = self.parse_parameters()
        rparen = self.expect(TokenType.RPAREN, "')' to close the parameter clause")
        end = rparen.end

        effects = self.parse_effect_specifiers()
        if effects is not None:
            end = self.tokens[self.pos - 1].end

        return_clause = return_type = ""
        if self.match(TokenType.ARROW):
            arrow = self.advance()
            last = self.skip_type()
            if last is None:
                raise self.error("expected a return type after '->'", arrow)
            return_clause = self.text(arrow.start, last.end)
            return_type = self.text(arrow.end, last.end).strip()
            end = last.end

        where_clause = ""
        if self.peek().is_keyword("where"):
            where = self.advance()
            last = self.skip_type()
            if last is None:
                raise self.error("expected requirements after 'where'", where)
            where_clause = self.text(where.start, last.end)
            end = last.end

        has_body = False
        if self.match(TokenType.LBRACE):
            end = self.skip_block().end
            has_body = True

        return FunctionDecl(
            "func",
            first.start,
            end,
            first.line,
            first.column,
            name=name_token.value,
            generic_parameter_clause=generic_clause,
            parameter_clause_text=self.text(lparen.end, rparen.start),
            parameters=parameters,
            effect_specifiers=effects,
            return_clause=return_clause,
            return_type=return_type,
            generic_where_clause=where_clause,
            has_body=has_body,
        )

    def parse_parameters(self) -> list[ParameterNode]:
        parameters = []
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            names = []
            while self.match(TokenType.IDENTIFIER, TokenType.KEYWORD):
                names.append(self.advance())
            if not names or len(names) > 2:
                raise self.error("expected a parameter name")
            colon = self.expect(TokenType.COLON, "':' after the parameter name")

            type_end = colon.end
            default = None
            depth = 0
            while True:
                token = self.peek()
                if token.type is TokenType.EOF:
                    raise self.error("unterminated parameter clause", token)
                if depth == 0 and token.type in (TokenType.COMMA, TokenType.RPAREN):
                    break
                if depth == 0 and token.type is TokenType.EQUALS and default is None:
                    default = self.advance().end
                    continue
                # inside a default value `<` and `>` are comparison operators
                bracket = default is None or token.type not in (TokenType.LANGLE, TokenType.RANGLE)
                if bracket and (token.type in _OPENERS or token.type is TokenType.LBRACE):
                    depth += 1
                elif bracket and (token.type in _CLOSERS or token.type is TokenType.RBRACE):
                    depth -= 1
                if default is None:
                    type_end = token.end
                self.advance()

            type_text = self.text(colon.end, type_end).strip()
            if not type_text:
                raise self.error("expected a parameter type", colon)
            default_text = None
            if default is not None:
                default_text = self.text(default, self.peek().start).strip()

            trailing = None
            if self.match(TokenType.COMMA):
                trailing = self.advance().value

            parameters.append(
                ParameterNode(
                    first_name=names[0].value,
                    second_name=names[1].value if len(names) == 2 else None,
                    type_text=type_text,
                    default_text=default_text,
                    trailing_comma=trailing,
                )
            )
        return parameters

    def parse_effect_specifiers(self) -> Optional[EffectSpecifiers]:
        start = self.peek()
        async_specifier = throws_specifier = None
        while True:
            token = self.peek()
            if token.type is TokenType.IDENTIFIER and token.value in ("async", "reasync") and not async_specifier:
                async_specifier = self.advance().value
            elif token.is_keyword("throws", "rethrows") and not throws_specifier:
                self.advance()
                end = token.end
                if self.match(TokenType.LPAREN) and self.adjacent():
                    end = self.skip_balanced().end
                throws_specifier = self.text(token.start, end)
            else:
                break
        if async_specifier is None and throws_specifier is None:
            return None
        last = self.tokens[self.pos - 1]
        return EffectSpecifiers(async_specifier, throws_specifier, self.text(start.start, last.end))

    def skip_type(self) -> Optional[Token]:
        """Consume a type (or where-clause requirements) and return its last token.

        Stops at the body, at `where`, or at the start of the next declaration
        when the function has no body.
        """
        last = None
        depth = 0
        while True:
            token = self.peek()
            if token.type is TokenType.EOF:
                break
            if depth == 0:
                if token.type in (TokenType.LBRACE, TokenType.RBRACE, TokenType.SEMICOLON) or token.is_keyword("where"):
                    break
                if last is not None and token.line > last.line and self.starts_declaration(token):
                    break
            if token.type in _OPENERS:
                depth += 1
            elif token.type in _CLOSERS:
                depth -= 1
            last = self.advance()
        return last

    def starts_declaration(self, token: Token) -> bool:
        if token.type in (TokenType.AT, TokenType.POUND):
            return True
        if token.type is TokenType.KEYWORD and token.value in DECLARATION_INTRODUCERS:
            return True
        return token.type is TokenType.IDENTIFIER and token.value in MODIFIER_WORDS


def parse_declaration(source: str) -> Declaration:
    """Parse the first declaration in `source`, attributes included."""
    return Parser(source).parse_declaration(0)
