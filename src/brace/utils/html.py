"""HTML escaping for the two output contexts.

The escaping policy is deliberately narrow and must stay exactly as is,
rendered output depends on it:

- Body text: ``&``, ``<`` and ``>``.
- Double-quoted attribute values: ``"`` only.

Apostrophes are not escaped in either context.

Complexity:
    Both functions are single-pass via ``str.translate()``. A translation
    table replaces every character independently, so ``&`` never gets
    double-escaped regardless of order.
"""

from __future__ import annotations

_BODY_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
    }
)

_ATTRIBUTE_ESCAPE_TABLE = str.maketrans({'"': "&quot;"})

_BODY_SPECIAL = frozenset("&<>")


def html_escape(value: str) -> str:
    """Escape ``value`` for insertion into HTML body text.

    Example:
        >>> html_escape("Title & <Foo>")
        'Title &amp; &lt;Foo&gt;'
    """
    # Fast path: most strings contain nothing to escape
    if not _BODY_SPECIAL.intersection(value):
        return value
    return value.translate(_BODY_ESCAPE_TABLE)


def attribute_escape(value: str) -> str:
    """Escape ``value`` for insertion into a double-quoted attribute.

    Example:
        >>> attribute_escape('foo " bar')
        'foo &quot; bar'
    """
    if '"' not in value:
        return value
    return value.translate(_ATTRIBUTE_ESCAPE_TABLE)
