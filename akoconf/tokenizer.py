"""Lexer for the Ako configuration language."""

from __future__ import annotations

import enum
import math
import string
from dataclasses import dataclass
from typing import List, Optional, Union

_ID_START = frozenset(string.ascii_letters + "_")
_ID_BODY = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)
_LINE_BREAKS = "\n\t"
_INT_MAX = 2**63 - 1


class AkoError(Exception):
    """Raised when Ako source text cannot be processed."""


class TokenType(enum.Enum):
    """Kinds of lexical tokens; the value is the display name."""

    NONE = "None"
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    IDENT = "Identity"
    DOT = "Dot"
    SEMICOLON = "Semicolon"
    AND = "And"
    PLUS = "Plus"
    MINUS = "Minus"
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    OPEN_D_BRACE = "OpenDoubleBrace"
    CLOSE_D_BRACE = "CloseDoubleBrace"
    VECTORCROSS = "VectorCross"


@dataclass(frozen=True)
class Location:
    """A position in the source text."""

    line: int
    column: int
    index: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


TokenValue = Union[None, bool, int, float, str]


@dataclass(frozen=True)
class Token:
    """A lexical token with its span and literal value."""

    kind: TokenType
    start: Location
    end: Location
    value: TokenValue = None


_SINGLE = {
    "+": (TokenType.PLUS, True),
    "-": (TokenType.MINUS, False),
    ";": (TokenType.SEMICOLON, None),
    ".": (TokenType.DOT, None),
    "&": (TokenType.AND, None),
}

_ESCAPES = {"n": "\n", "t": "\t"}


class _Scanner:
    def __init__(self, source: str, ignore_floats: bool) -> None:
        # Text after an embedded NUL is never seen.
        self.source = source.split("\0", 1)[0]
        self.ignore_floats = ignore_floats
        self.pos = 0
        self.line = 1
        self.column = 1
        self.meta = self.location
        self.tokens: List[Token] = []

    @property
    def location(self) -> Location:
        return Location(self.line, self.column, self.pos)

    def has(self, offset: int = 0) -> bool:
        return self.pos + offset < len(self.source)

    def peek(self, offset: int = 0) -> str:
        return self.source[self.pos + offset] if self.has(offset) else ""

    def consume(self) -> str:
        if not self.has():
            return ""
        ch = self.source[self.pos]
        self.pos += 1
        if ch in _LINE_BREAKS:
            self.line += 1
            self.column = 0
        self.column += 1
        return ch

    def add(self, kind: TokenType, value: TokenValue = None) -> None:
        self.tokens.append(Token(kind, self.meta, self.location, value))

    def skip_comment(self) -> None:
        self.consume()
        comment_line = self.line
        while self.line == comment_line:
            if self.consume() == "":
                break

    def read_number(self) -> bool:
        """Read a number token; False if none starts here, AkoError if malformed."""
        end = self.pos
        while end < len(self.source):
            ch = self.source[end]
            if ch == "." and self.ignore_floats:
                break
            if ch in _DIGITS or ch == ".":
                end += 1
            else:
                break
        if end == self.pos:
            return False
        text = "".join(self.consume() for _ in range(end - self.pos))
        kind, value = self._convert(text)
        self.add(kind, value)
        return True

    def _convert(self, text: str):
        failure = AkoError(f"Failed to parse number at {self.meta}")
        if "." in text:
            try:
                value = float(text)
            except ValueError:
                raise failure from None
            underflow = value == 0.0 and any(d in "123456789" for d in text)
            if math.isinf(value) or underflow:
                raise failure
            return TokenType.FLOAT, value
        base = 8 if len(text) > 1 and text[0] == "0" else 10
        try:
            value = int(text, base)
        except ValueError:
            raise failure from None
        if value > _INT_MAX:
            raise failure
        return TokenType.INT, value

    def read_vector_tail(self) -> None:
        while self.peek() == "x":
            delimiter = self.location
            self.consume()
            self.add(TokenType.VECTORCROSS)
            try:
                found = self.read_number()
            except AkoError:
                found = False
            if not found:
                raise AkoError(f"Failed to parse vector at {delimiter}")

    def read_string(self) -> None:
        self.consume()
        chars: List[str] = []
        while self.has():
            ch = self.consume()
            if ch == "\\":
                escaped = self.consume()
                chars.append(_ESCAPES.get(escaped, escaped))
                continue
            if ch == '"':
                break
            chars.append(ch)
        self.add(TokenType.STRING, "".join(chars))

    def read_bracket(self, ch: str) -> None:
        self.consume()
        double = self.peek() == ch
        if double:
            self.consume()
        if ch == "[":
            kind = TokenType.OPEN_D_BRACE if double else TokenType.OPEN_BRACE
        else:
            kind = TokenType.CLOSE_D_BRACE if double else TokenType.CLOSE_BRACE
        self.add(kind)

    def read_ident(self) -> None:
        end = self.pos
        while end < len(self.source) and self.source[end] in _ID_BODY:
            end += 1
        text = "".join(self.consume() for _ in range(end - self.pos))
        self.add(TokenType.IDENT, text)

    def run(self) -> List[Token]:
        while self.has():
            ch = self.peek()
            if ch in " \n\t":
                self.consume()
                continue
            if ch == "#":
                self.skip_comment()
                continue

            self.meta = self.location

            if ch in _SINGLE:
                self.consume()
                kind, value = _SINGLE[ch]
                self.add(kind, value)
            elif ch in "[]":
                self.read_bracket(ch)
            elif ch in _ID_START:
                self.read_ident()
            elif self.read_number():
                self.read_vector_tail()
            elif ch == '"':
                self.read_string()
            else:
                raise AkoError(f"Unknown character {ch} at {self.meta}")
        return self.tokens


def tokenize(source: str, ignore_floats: bool = False) -> List[Token]:
    """Split Ako source into tokens.

    With ``ignore_floats`` a dot always ends a number, so ``1.2`` reads as
    two integers around a dot (used for lookup paths).
    """
    return _Scanner(source, ignore_floats).run()


def token_values(tokens: List[Token]) -> List[Optional[TokenValue]]:
    """Return the literal values of the given tokens, in order."""
    return [token.value for token in tokens]