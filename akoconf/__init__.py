"""Tokenizer, parser, element tree, serializer and command line tool for the Ako configuration language."""

__version__ = "0.1.0"
__all__ = ["cli", "elem", "parser", "serializer", "tokenizer"]