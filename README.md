# akoconf

A reader and writer for the Ako configuration language.

Ako is a small, terse config format:

```
window.size 180x190
+fullscreen
title "My Game"
player &Players.Default
song [
    name "Anthem"
    links [[ "a" "b" "c" ]]
]
```

- `key value` pairs, with dotted keys building nested tables
- `+key`, `-key` and `;key` for true, false and null (`key+` works as well)
- integers, floats and vectors such as `1x2x3` (at most four parts);
  an integer with a leading `0` is read as octal
- strings in double quotes; `\n` and `\t` are escapes, and a backslash
  before any other character keeps that character (so `\"` is a quote)
- short types: `&Some.Name`
- tables in `[ ... ]`, arrays in `[[ ... ]]`
- comments start with `#` and run to the end of the line (a tab also ends one)

A document's root is either a table, written with or without brackets, or
an array.

## Installing

```
pip install .
```

## Parsing

```python
from akoconf.parser import parse

root = parse('window.size 180x190 +vsync title "Hello"')
root.get("title").as_string()                  # "Hello"
root.get("vsync").as_bool()                    # True
root.get("window.size").array_get(0).as_int()  # 180
```

`parse` returns `None` for empty text or text with no tokens. It raises
`akoconf.tokenizer.AkoError` when the text cannot be read; errors in the
structure of the document raise its subclass `akoconf.parser.AkoParseError`.
`parse_tokens` builds a document from tokens made by
`akoconf.tokenizer.tokenize`.

`Elem.get` takes a dotted path, where array items are picked by index
(`"song.artists.0.name"`). It returns `None` when the path is malformed or
a key is missing; an array index that is out of range raises `IndexError`.

## The element tree

`akoconf.elem.Elem` is one node; its `kind` is an `ElemType` (`NULL`,
`STRING`, `INT`, `FLOAT`, `SHORTTYPE`, `BOOL`, `TABLE`, `ARRAY`, `ERROR`).

- build with `Elem.null()`, `Elem.string(...)`, `Elem.integer(...)`,
  `Elem.floating(...)`, `Elem.shorttype(...)`, `Elem.boolean(...)`,
  `Elem.table()`, `Elem.array()`, `Elem.error(...)`, or change a node in
  place with `assign(kind, value)`
- read with `as_string()`, `as_int()`, `as_float()`, `as_shorttype()`,
  `as_bool()`; each raises `TypeError` on the wrong kind
- tables: `table_add`, `table_get`, `table_remove`, `table_items` and `in`;
  a table keeps insertion order and may hold a key more than once, in which
  case `table_get` finds the first entry and `table_remove` removes the last
- arrays: `append`, `array_get`, `array_remove`
- `len()` and iteration work on both (tables iterate over their keys)
- integers must fit in 64 bits

## Writing documents out

```python
from akoconf.elem import Elem
from akoconf.serializer import SerializeFlags, serialize

root = Elem.table()
root.table_add("title", Elem.string("CATS RULE THE WORLD"))
root.table_add("player", Elem.shorttype("Players.Plexamp"))

print(serialize(root, SerializeFlags.FORMAT))
```

`SerializeFlags.FORMAT` puts each entry on its own line and indents with
tabs; add `SerializeFlags.USE_SPACES` to indent with four spaces. Without
`FORMAT` everything is written on one line, separated by spaces.

A root table is written without brackets. Nested arrays of up to four
numbers are written as vectors (`1x2`), floats with six decimals, and
true, false and null values before their key (`+key`). String contents
are written as they are, without escaping. Error elements raise
`AkoSerializeError`.

## Command line

```
akocli -i config.ako --validate
akocli -i config.ako -q song.artists.0.name
cat config.ako | akocli -q window.size
```

Options:

- `-i`, `--input FILE`: the file to read; `-` or piped input reads standard input
- `-t`, `--validate`: only check that the input parses
- `-q`, `--query PATH`: print the element at a dotted path, formatted
- `-v`, `--version`: print the version
- `-h`, `--help`: print the usage text

The exit status is 0 on success and 1 when the input cannot be read,
parsing fails, or a query finds nothing. Without `--query` or
`--validate` the command only parses the input.