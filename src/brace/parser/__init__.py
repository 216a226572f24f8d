"""Brace parser: template source to a range-annotated expression tree."""

from brace.parser.core import Parser, parse
from brace.parser.errors import ParseError, ParseErrorReason

__all__ = ["ParseError", "ParseErrorReason", "Parser", "parse"]
