"""Turn an element tree back into Ako text."""

from __future__ import annotations

import enum
from typing import List, Optional

from akoconf.elem import Elem, ElemType
from akoconf.tokenizer import AkoError

_MAX_VECTOR = 4
_VALUE_FIRST = frozenset({"+", "-", ";"})
_NUMERIC = frozenset({ElemType.INT, ElemType.FLOAT})


class SerializeFlags(enum.IntFlag):
    """Layout options for :func:`serialize`."""

    NONE = 0
    FORMAT = 1  # one entry per line, indented with tabs
    USE_SPACES = 2  # indent with four spaces instead of tabs


class AkoSerializeError(AkoError):
    """Raised when an element cannot be written as Ako text."""


def _number(elem: Elem) -> str:
    if elem.kind is ElemType.INT:
        return str(elem.value)
    return f"{elem.value:.6f}"


class _Writer:
    def __init__(self, indent: str) -> None:
        self.indent = indent
        self.end = "\n" if indent else " "

    def pad(self, level: int) -> str:
        return self.indent * level

    def write(self, elem: Elem, level: int, root: bool) -> str:
        kind = elem.kind
        if kind is ElemType.BOOL:
            return "+" if elem.value else "-"
        if kind is ElemType.NULL:
            return ";"
        if kind in _NUMERIC:
            return _number(elem)
        if kind is ElemType.SHORTTYPE:
            return f"&{elem.value}"
        if kind is ElemType.STRING:
            return f'"{elem.value}"'
        if kind is ElemType.ARRAY:
            return self.write_array(elem, level, root)
        if kind is ElemType.TABLE:
            return self.write_table(elem, level, root)
        raise AkoSerializeError("Unknown type for serialisation")

    def write_array(self, array: Elem, level: int, root: bool) -> str:
        items: List[Elem] = list(array)
        if not items:
            return "[[]]"

        is_vector = (
            not root
            and len(items) <= _MAX_VECTOR
            and all(item.kind in _NUMERIC for item in items)
        )
        if is_vector:
            return "x".join(_number(item) for item in items)

        parts = ["[[", self.end]
        for item in items:
            parts.append(self.pad(level + 1))
            parts.append(self.write(item, level + 1, False))
            parts.append(self.end)
        parts.append(self.pad(level))
        parts.append("]]")
        return "".join(parts)

    def write_table(self, table: Elem, level: int, root: bool) -> str:
        entries = list(table.table_items())
        parts: List[str] = []
        if not root:
            if not entries:
                return "[]"
            parts.append("[")
            parts.append(self.end)

        depth = 0 if root else level + 1
        for key, value in entries:
            parts.append(self.pad(depth))
            text = self.write(value, depth, False)
            if text in _VALUE_FIRST:
                parts.append(f"{text}{key}")
            else:
                parts.append(f"{key} {text}")
            parts.append(self.end)

        parts.append(self.pad(level))
        if not root:
            parts.append("]")
        return "".join(parts)


def serialize(elem: Optional[Elem], flags: SerializeFlags = SerializeFlags.NONE) -> str:
    """Write an element as Ako text.

    A root table is written without surrounding brackets. Without
    ``SerializeFlags.FORMAT`` entries are separated by single spaces.
    Raises AkoSerializeError for elements that have no text form.
    """
    flags = SerializeFlags(flags)
    if not flags & SerializeFlags.FORMAT:
        indent = ""
    elif flags & SerializeFlags.USE_SPACES:
        indent = "    "
    else:
        indent = "\t"

    if elem is None:
        return ""
    return _Writer(indent).write(elem, 0, True)