"""Character classes used by the scanner.

Identifiers, tag names and attribute names currently share one class:
Unicode letters only (no digits, underscores or punctuation). They are kept
as separate predicates so the classes can diverge without touching the
parser. A name starts with a letter and may continue with combining marks,
so names written in decomposed form parse like their composed spelling.
"""

from __future__ import annotations

import unicodedata


def is_identifier_char(char: str) -> bool:
    return char.isalpha()


def is_tag_name_char(char: str) -> bool:
    return char.isalpha()


def is_attribute_name_char(char: str) -> bool:
    return char.isalpha()


def is_combining_mark(char: str) -> bool:
    """Unicode mark (Mn, Mc, Me): accents and other combining characters."""
    return unicodedata.category(char).startswith("M")


def is_whitespace(char: str) -> bool:
    return char.isspace()
