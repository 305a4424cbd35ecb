"""Element tree for Ako documents: tables, arrays and scalar values."""

from __future__ import annotations

import enum
from typing import Any, Iterator, List, Optional, Tuple

from akoconf.tokenizer import AkoError, TokenType, Token, tokenize

_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_PATH_KINDS = frozenset(
    {TokenType.IDENT, TokenType.STRING, TokenType.DOT, TokenType.INT}
)


class ElemType(enum.Enum):
    """Kinds of element; the value is the display name."""

    NULL = "null"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    SHORTTYPE = "shorttype"
    BOOL = "bool"
    TABLE = "table"
    ARRAY = "array"
    ERROR = "error"


_CONTAINERS = frozenset({ElemType.TABLE, ElemType.ARRAY})
_TEXTUAL = frozenset({ElemType.STRING, ElemType.SHORTTYPE, ElemType.ERROR})


class Elem:
    """A node in an Ako document.

    Tables keep their entries in insertion order and may hold the same key
    more than once; lookups find the first entry with a key.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, kind: ElemType = ElemType.NULL, value: Any = None) -> None:
        self.kind = ElemType.NULL
        self.value: Any = None
        self.assign(kind, value)

    # Constructors

    @classmethod
    def null(cls) -> Elem:
        return cls(ElemType.NULL)

    @classmethod
    def string(cls, value: str) -> Elem:
        return cls(ElemType.STRING, value)

    @classmethod
    def integer(cls, value: int) -> Elem:
        return cls(ElemType.INT, value)

    @classmethod
    def floating(cls, value: float) -> Elem:
        return cls(ElemType.FLOAT, value)

    @classmethod
    def shorttype(cls, value: str) -> Elem:
        return cls(ElemType.SHORTTYPE, value)

    @classmethod
    def boolean(cls, value: bool) -> Elem:
        return cls(ElemType.BOOL, value)

    @classmethod
    def table(cls) -> Elem:
        return cls(ElemType.TABLE)

    @classmethod
    def array(cls) -> Elem:
        return cls(ElemType.ARRAY)

    @classmethod
    def error(cls, message: str) -> Elem:
        return cls(ElemType.ERROR, message)

    # Type handling

    def is_error(self) -> bool:
        return self.kind is ElemType.ERROR

    def assign(self, kind: ElemType, value: Any = None) -> None:
        """Change this element's kind and value.

        Assigning a container kind without a value keeps the current entries
        if the element already has that kind, and starts empty otherwise.
        """
        kind = ElemType(kind)
        if kind in _CONTAINERS:
            if value is None:
                value = self.value if self.kind is kind else []
            else:
                value = list(value)
                self._check_entries(kind, value)
        elif kind in _TEXTUAL:
            if not isinstance(value, str):
                raise TypeError(f"{kind.value} element needs a str value")
        elif kind is ElemType.INT:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("int element needs an int value")
            if not _INT_MIN <= value <= _INT_MAX:
                raise OverflowError(f"{value} does not fit in a 64-bit integer")
        elif kind is ElemType.FLOAT:
            value = float(value)
        elif kind is ElemType.BOOL:
            value = bool(value)
        else:
            value = None
        self.kind = kind
        self.value = value

    @staticmethod
    def _check_entries(kind: ElemType, entries: List[Any]) -> None:
        if kind is ElemType.ARRAY:
            if not all(isinstance(item, Elem) for item in entries):
                raise TypeError("array entries must be Elem instances")
            return
        for index, entry in enumerate(entries):
            key, item = entry
            if not isinstance(key, str) or not isinstance(item, Elem):
                raise TypeError("table entries must be (str, Elem) pairs")
            entries[index] = (key, item)

    def _require(self, *kinds: ElemType) -> None:
        if self.kind not in kinds:
            wanted = " or ".join(kind.value for kind in kinds)
            raise TypeError(f"expected {wanted} element, got {self.kind.value}")

    # Getters

    def as_string(self) -> str:
        self._require(ElemType.STRING, ElemType.ERROR)
        return self.value

    def as_int(self) -> int:
        self._require(ElemType.INT)
        return self.value

    def as_float(self) -> float:
        self._require(ElemType.FLOAT)
        return self.value

    def as_shorttype(self) -> str:
        self._require(ElemType.SHORTTYPE)
        return self.value

    def as_bool(self) -> bool:
        self._require(ElemType.BOOL)
        return self.value

    # Tables

    def table_add(self, key: str, value: Elem) -> Elem:
        """Append an entry and return the added value."""
        self._require(ElemType.TABLE)
        if not isinstance(value, Elem):
            raise TypeError("table values must be Elem instances")
        self.value.append((str(key), value))
        return value

    def table_get(self, key: str) -> Optional[Elem]:
        self._require(ElemType.TABLE)
        return next((item for name, item in self.value if name == key), None)

    def table_remove(self, key: str) -> None:
        """Remove the last entry with this key; do nothing if there is none."""
        self._require(ElemType.TABLE)
        positions = [pos for pos, (name, _) in enumerate(self.value) if name == key]
        if positions:
            del self.value[positions[-1]]

    def table_items(self) -> Iterator[Tuple[str, Elem]]:
        self._require(ElemType.TABLE)
        return iter(list(self.value))

    def __contains__(self, key: object) -> bool:
        self._require(ElemType.TABLE)
        return any(name == key for name, _ in self.value)

    # Arrays

    def append(self, value: Elem) -> Elem:
        """Append an item and return it."""
        self._require(ElemType.ARRAY)
        if not isinstance(value, Elem):
            raise TypeError("array items must be Elem instances")
        self.value.append(value)
        return value

    def array_get(self, index: int) -> Elem:
        self._require(ElemType.ARRAY)
        if not 0 <= index < len(self.value):
            raise IndexError(f"array index {index} out of range")
        return self.value[index]

    def array_remove(self, index: int) -> None:
        self._require(ElemType.ARRAY)
        if not 0 <= index < len(self.value):
            raise IndexError(f"array index {index} out of range")
        del self.value[index]

    # Containers

    def __len__(self) -> int:
        self._require(ElemType.TABLE, ElemType.ARRAY)
        return len(self.value)

    def __iter__(self) -> Iterator[Any]:
        """Iterate over array items, or over table keys."""
        self._require(ElemType.TABLE, ElemType.ARRAY)
        if self.kind is ElemType.ARRAY:
            return iter(list(self.value))
        return iter([name for name, _ in self.value])

    # Lookup

    def _step(self, token: Token) -> Optional[Elem]:
        if self.kind is ElemType.ARRAY:
            if token.kind is not TokenType.INT:
                return None
            return self.array_get(token.value)
        if token.kind not in (TokenType.STRING, TokenType.IDENT):
            return None
        return self.table_get(token.value)

    def get(self, path: str) -> Optional[Elem]:
        """Find an element by a dotted path such as ``song.artists.0.name``.

        Returns None when the path is malformed or leads nowhere.
        """
        try:
            tokens = tokenize(path, ignore_floats=True)
        except AkoError:
            return None

        stream = iter(tokens)
        current: Optional[Elem] = self
        token = next(stream, None)
        while token is not None:
            if token.kind not in _PATH_KINDS:
                return None
            following = next(stream, None)
            current = current._step(token)
            if following is None or current is None:
                return current
            if following.kind is not TokenType.DOT:
                return None
            token = next(stream, None)
        return None

    # Comparison and display

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Elem):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __repr__(self) -> str:
        return f"Elem({self.kind.name}, {self.value!r})"