"""Token definitions for the Swift declaration lexer."""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    IDENTIFIER = auto()
    KEYWORD = auto()
    NUMBER = auto()
    STRING = auto()
    AT = auto()
    POUND = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LANGLE = auto()
    RANGLE = auto()
    ARROW = auto()
    COLON = auto()
    COMMA = auto()
    SEMICOLON = auto()
    DOT = auto()
    ELLIPSIS = auto()
    EQUALS = auto()
    OPERATOR = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A lexed token.

    `start` and `end` are offsets into the source so callers can slice the
    original text back out verbatim.
    """

    type: TokenType
    value: str
    start: int
    end: int
    line: int
    column: int

    def is_keyword(self, *words: str) -> bool:
        return self.type is TokenType.KEYWORD and self.value in words


# Only the words the declaration parser needs to tell apart. Contextual
# keywords like `async` or `mutating` stay identifiers until the parser looks
# at their position.
KEYWORDS = frozenset(
    {
        "func",
        "init",
        "deinit",
        "subscript",
        "var",
        "let",
        "struct",
        "class",
        "enum",
        "protocol",
        "extension",
        "actor",
        "typealias",
        "associatedtype",
        "case",
        "import",
        "operator",
        "macro",
        "where",
        "throws",
        "rethrows",
        "inout",
    }
)

DECLARATION_INTRODUCERS = frozenset(
    {
        "func",
        "init",
        "deinit",
        "subscript",
        "var",
        "let",
        "struct",
        "class",
        "enum",
        "protocol",
        "extension",
        "actor",
        "typealias",
        "associatedtype",
        "case",
        "import",
        "operator",
        "macro",
    }
)

SINGLE_CHAR_TOKENS = {
    "@": TokenType.AT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ".": TokenType.DOT,
    "=": TokenType.EQUALS,
}

OPERATOR_CHARS = "/=-+!*%<>&|^~?."
