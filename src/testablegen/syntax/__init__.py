"""Swift source tokenizing and declaration parsing."""

from .lexer import Lexer, tokenize
from .nodes import Attribute, Declaration, EffectSpecifiers, FunctionDecl, Modifier, ParameterNode
from .parser import Parser, parse_declaration
from .tokens import Token, TokenType

__all__ = [
    "Attribute",
    "Declaration",
    "EffectSpecifiers",
    "FunctionDecl",
    "Lexer",
    "Modifier",
    "ParameterNode",
    "Parser",
    "Token",
    "TokenType",
    "parse_declaration",
    "tokenize",
]
