"""Parser that builds an element tree from Ako tokens."""

from __future__ import annotations

from typing import List, Optional, Sequence

from akoconf.elem import Elem, ElemType
from akoconf.tokenizer import AkoError, Location, Token, TokenType, tokenize

_NUMBERS = frozenset({TokenType.INT, TokenType.FLOAT})
_KEYS = frozenset({TokenType.IDENT, TokenType.STRING})
_VALUE_FIRST = frozenset({TokenType.PLUS, TokenType.MINUS, TokenType.SEMICOLON})
_ENTRY_START = _KEYS | _VALUE_FIRST
_MAX_VECTOR = 4


class AkoParseError(AkoError):
    """Raised when a token stream does not form a valid Ako document."""


class _Parser:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens: List[Token] = list(tokens)
        self.index = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        position = self.index + offset
        return self.tokens[position] if position < len(self.tokens) else None

    def kind_at(self, offset: int = 0) -> Optional[TokenType]:
        token = self.peek(offset)
        return token.kind if token is not None else None

    def consume(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self.index += 1
        return token

    # Values

    def parse_value(self) -> Elem:
        token = self.peek()
        if token is None:
            raise AkoParseError("Unexpected end of input, expected a value.")
        kind = token.kind

        if kind is TokenType.OPEN_D_BRACE:
            return self.parse_array()
        if kind is TokenType.OPEN_BRACE:
            return self.parse_table(ignore_braces=False)
        if kind is TokenType.SEMICOLON:
            self.consume()
            return Elem.null()
        if kind in (TokenType.BOOL, TokenType.PLUS, TokenType.MINUS):
            self.consume()
            return Elem.boolean(bool(token.value))
        if kind in _NUMBERS:
            if self.kind_at(1) is TokenType.VECTORCROSS:
                return self.parse_vector(token.start)
            self.consume()
            return _number(token)
        if kind is TokenType.STRING:
            self.consume()
            return Elem.string(token.value)
        if kind is TokenType.AND:
            return self.parse_shorttype(token)
        raise AkoParseError(f"Unsupported type at {token.start} -> {token.end}")

    def parse_vector(self, start: Location) -> Elem:
        vector = Elem.array()
        while True:
            token = self.peek()
            if token is None or token.kind not in _NUMBERS:
                raise AkoParseError(
                    f"Trying to use non vector type in vector at {start}"
                )
            self.consume()
            vector.append(_number(token))
            if self.kind_at() is TokenType.VECTORCROSS:
                self.consume()
                continue
            if len(vector) > _MAX_VECTOR:
                raise AkoParseError(
                    f"Vector size is greater than {_MAX_VECTOR} at {start}"
                )
            return vector

    def parse_shorttype(self, ampersand: Token) -> Elem:
        if self.kind_at(1) is not TokenType.IDENT:
            raise AkoParseError(
                "ShortType needs to start with an Identifier, "
                f"error at {ampersand.start}"
            )
        self.consume()
        parts: List[str] = []
        while self.kind_at() is TokenType.IDENT:
            parts.append(self.consume().value)
            if self.kind_at() is not TokenType.DOT:
                break
            self.consume()
            parts.append(".")
        return Elem.shorttype("".join(parts))

    # Containers

    def parse_entry(self, table: Elem) -> None:
        token = self.peek()
        if token is None:
            raise AkoParseError("Unexpected end of table element.")

        value_first = self.consume() if token.kind in _VALUE_FIRST else None

        if self.kind_at() not in _KEYS:
            raise AkoParseError("Expected an identifier or string.")

        current = table
        key: Optional[str] = None
        while self.kind_at() in _KEYS:
            name = self.consume().value
            if self.kind_at() is not TokenType.DOT:
                key = name
                break
            nested = current.table_get(name)
            if nested is None:
                nested = current.table_add(name, Elem.table())
            elif nested.kind is not ElemType.TABLE:
                raise AkoParseError(f"Key '{name}' does not hold a table.")
            current = nested
            self.consume()

        if key is None:
            raise AkoParseError("Failed to get table id.")

        if value_first is None:
            value = self.parse_value()
        elif value_first.kind is TokenType.SEMICOLON:
            value = Elem.null()
        else:
            value = Elem.boolean(bool(value_first.value))
        current.table_add(key, value)

    def parse_table(self, ignore_braces: bool) -> Elem:
        if not ignore_braces:
            if self.kind_at() is not TokenType.OPEN_BRACE:
                raise AkoParseError("Expected an opening brace.")
            self.consume()

        table = Elem.table()
        while self.peek() is not None and self.kind_at() is not TokenType.CLOSE_BRACE:
            if self.peek(1) is None:
                raise AkoParseError("Expected two tokens, got zero/one.")
            first = self.peek()
            if first.kind not in _ENTRY_START:
                raise AkoParseError(
                    "Expected an identifier, bool or null but got: "
                    f"{first.kind.value}"
                )
            self.parse_entry(table)

        if not ignore_braces:
            if self.kind_at() is not TokenType.CLOSE_BRACE:
                raise AkoParseError("Expected a closing brace.")
            self.consume()
        return table

    def parse_array(self) -> Elem:
        token = self.peek()
        if token is None:
            raise AkoParseError("Unexpected end of array.")
        if token.kind is not TokenType.OPEN_D_BRACE:
            raise AkoParseError(
                f"Open double brace expected at {token.start} -> {token.end}"
            )
        self.consume()

        array = Elem.array()
        while self.peek() is not None and self.kind_at() is not TokenType.CLOSE_D_BRACE:
            array.append(self.parse_value())

        if self.kind_at() is not TokenType.CLOSE_D_BRACE:
            raise AkoParseError("Expected a closing double brace.")
        self.consume()
        return array

    def parse_document(self) -> Elem:
        first = self.peek()
        if first is None:
            raise AkoParseError("No tokens to parse")
        if first.kind is TokenType.OPEN_D_BRACE:
            return self.parse_array()
        return self.parse_table(ignore_braces=first.kind is not TokenType.OPEN_BRACE)


def _number(token: Token) -> Elem:
    if token.kind is TokenType.INT:
        return Elem.integer(token.value)
    return Elem.floating(token.value)


def parse_tokens(tokens: Sequence[Token]) -> Elem:
    """Build a document from tokens; the root is a table or an array."""
    return _Parser(tokens).parse_document()


def parse(source: str) -> Optional[Elem]:
    """Parse Ako text.

    Returns None when the text is empty or holds no tokens. Raises
    AkoError (or its subclass AkoParseError) when the text is invalid.
    """
    if not source:
        return None
    tokens = tokenize(source)
    if not tokens:
        return None
    return parse_tokens(tokens)