"""
Lexer for Swift source code.

The lexer only has to be precise enough to find declaration boundaries:
strings, comments and brackets are tracked exactly, everything else is
coarse. Each token remembers its offsets so clauses can be copied back out of
the source without reformatting.
"""

from typing import List

from .tokens import KEYWORDS, OPERATOR_CHARS, SINGLE_CHAR_TOKENS, Token, TokenType


class Lexer:
    """Converts Swift source text into a list of tokens."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def advance(self) -> str:
        ch = self.peek()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def at_string_start(self) -> bool:
        ch = self.peek()
        if ch == '"':
            return True
        if ch != "#":
            return False
        offset = 0
        while self.peek(offset) == "#":
            offset += 1
        return self.peek(offset) == '"'

    def skip_whitespace(self) -> None:
        while self.peek() and self.peek() in " \t\r\n":
            self.advance()

    def skip_comment(self) -> None:
        """Skip a line comment or a (possibly nested) block comment."""
        if self.peek(1) == "/":
            while self.peek() and self.peek() != "\n":
                self.advance()
            return

        self.advance()
        self.advance()
        depth = 1
        while self.peek() and depth:
            if self.peek() == "/" and self.peek(1) == "*":
                self.advance()
                self.advance()
                depth += 1
            elif self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                depth -= 1
            else:
                self.advance()

    def read_string(self) -> None:
        """Consume a string literal, including raw and multi-line forms.

        Interpolations (`\\(...)`) may contain nested strings and parentheses,
        so they are consumed recursively.
        """
        hashes = 0
        while self.peek() == "#":
            self.advance()
            hashes += 1

        multiline = self.source.startswith('"""', self.pos)
        quote = '"""' if multiline else '"'
        for _ in quote:
            self.advance()

        terminator = quote + "#" * hashes
        escape = "\\" + "#" * hashes
        while self.peek():
            if self.source.startswith(terminator, self.pos):
                for _ in terminator:
                    self.advance()
                return
            if self.source.startswith(escape, self.pos):
                for _ in escape:
                    self.advance()
                if self.peek() == "(":
                    self.read_interpolation()
                else:
                    self.advance()
                continue
            if not multiline and self.peek() == "\n":
                # unterminated literal, stop at end of line
                return
            self.advance()

    def read_interpolation(self) -> None:
        self.advance()  # (
        depth = 1
        while self.peek() and depth:
            if self.at_string_start():
                self.read_string()
                continue
            ch = self.advance()
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1

    def read_identifier(self) -> str:
        if self.peek() == "`":
            result = self.advance()
            while self.peek() and self.peek() not in "`\n":
                result += self.advance()
            if self.peek() == "`":
                result += self.advance()
            return result

        result = ""
        while self.peek() and (self.peek().isalnum() or self.peek() in "_$"):
            result += self.advance()
        return result

    def read_number(self) -> str:
        result = ""
        while self.peek() and (self.peek().isalnum() or self.peek() == "_"):
            result += self.advance()
        if self.peek() == "." and self.peek(1).isdigit():
            result += self.advance()
            while self.peek() and (self.peek().isalnum() or self.peek() == "_"):
                result += self.advance()
        return result

    def add_token(self, token_type: TokenType, start: int, line: int, column: int) -> None:
        value = self.source[start : self.pos]
        self.tokens.append(Token(token_type, value, start, self.pos, line, column))

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of Token objects, ending with an EOF token.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()
            if self.pos >= len(self.source):
                break

            ch = self.peek()
            if ch == "/" and self.peek(1) in ("/", "*"):
                self.skip_comment()
                continue

            start, line, column = self.pos, self.line, self.column

            if self.at_string_start():
                self.read_string()
                self.add_token(TokenType.STRING, start, line, column)
                continue

            if ch == "#":
                self.advance()
                self.read_identifier()
                self.add_token(TokenType.POUND, start, line, column)
                continue

            if ch.isdigit():
                self.read_number()
                self.add_token(TokenType.NUMBER, start, line, column)
                continue

            if ch.isalpha() or ch in "_$`":
                value = self.read_identifier()
                token_type = TokenType.KEYWORD if value in KEYWORDS else TokenType.IDENTIFIER
                self.add_token(token_type, start, line, column)
                continue

            if ch == "-" and self.peek(1) == ">":
                self.advance()
                self.advance()
                self.add_token(TokenType.ARROW, start, line, column)
                continue

            if self.source.startswith("...", self.pos):
                self.advance()
                self.advance()
                self.advance()
                self.add_token(TokenType.ELLIPSIS, start, line, column)
                continue

            if ch in SINGLE_CHAR_TOKENS:
                self.advance()
                self.add_token(SINGLE_CHAR_TOKENS[ch], start, line, column)
                continue

            if ch in OPERATOR_CHARS:
                while self.peek() and self.peek() in OPERATOR_CHARS and self.peek() not in SINGLE_CHAR_TOKENS:
                    self.advance()
                self.add_token(TokenType.OPERATOR, start, line, column)
                continue

            # Unknown character - skip
            self.advance()

        self.tokens.append(Token(TokenType.EOF, "", self.pos, self.pos, self.line, self.column))
        return self.tokens


def tokenize(source: str) -> List[Token]:
    return Lexer(source).tokenize()
