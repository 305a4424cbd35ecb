"""Command line tool for checking and querying Ako documents."""

from __future__ import annotations

import getopt
import sys
from typing import List, Optional

from akoconf.elem import Elem
from akoconf.parser import parse
from akoconf.serializer import SerializeFlags, serialize
from akoconf.tokenizer import AkoError

VERSION = "0.1.0"

_SHORT_OPTIONS = "hvti:q:"
_LONG_OPTIONS = ["help", "version", "input=", "validate", "query="]

_HELP = (
    "Usage: akocli [OPTIONS]\n"
    "\nOptions:\n"
    "\t-h, --help       Show this help message and exit\n"
    "\t-v, --version    Show version information and exit\n"
    "\t-i               Input file\n"
    "\t-t, --validate   Validate the input file\n"
)


def _print_help() -> None:
    sys.stdout.write(_HELP)


def _read_input(input_file: Optional[str]) -> Optional[str]:
    """Return the source text, or None after reporting a failure."""
    stdin = sys.stdin
    if not stdin.isatty() or input_file == "-":
        return stdin.read()
    if input_file is None:
        print("No input file specified")
        return None
    try:
        with open(input_file, encoding="utf-8") as handle:
            return handle.read()
    except OSError as exc:
        print(f"fopen: {exc.strerror or exc}", file=sys.stderr)
        return None


def _parse(source: str) -> Elem:
    """Parse the source, turning failures into error elements."""
    try:
        result = parse(source)
    except AkoError as exc:
        return Elem.error(str(exc))
    if result is None:
        return Elem.error("No content to parse")
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    if any(arg in ("-h", "--help") for arg in args):
        _print_help()
        return 0

    try:
        options, _ = getopt.gnu_getopt(args, _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError:
        _print_help()
        return 1

    input_file: Optional[str] = None
    query: Optional[str] = None
    validate = False
    for option, value in options:
        if option in ("-h", "--help"):
            _print_help()
            return 0
        if option in ("-v", "--version"):
            print(f"akocli version {VERSION}")
            return 0
        if option in ("-i", "--input"):
            input_file = value
        elif option in ("-t", "--validate"):
            validate = True
        elif option in ("-q", "--query"):
            query = value

    source = _read_input(input_file)
    if source is None:
        return 1

    result = _parse(source)
    if result.is_error():
        print(f"Failed to parse: {result.as_string()}")
        return 1

    if validate:
        print("Parsed successfully")
        return 0

    if query is not None:
        try:
            found = result.get(query)
        except (IndexError, TypeError):
            found = None
        if found is None:
            return 1
        print(serialize(found, SerializeFlags.FORMAT))

    return 0


if __name__ == "__main__":
    sys.exit(main())