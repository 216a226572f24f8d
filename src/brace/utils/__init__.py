"""Leaf utilities: character classes and HTML escaping."""

from brace.utils.chars import (
    is_attribute_name_char,
    is_combining_mark,
    is_identifier_char,
    is_tag_name_char,
    is_whitespace,
)
from brace.utils.html import attribute_escape, html_escape

__all__ = [
    "attribute_escape",
    "html_escape",
    "is_attribute_name_char",
    "is_combining_mark",
    "is_identifier_char",
    "is_tag_name_char",
    "is_whitespace",
]
