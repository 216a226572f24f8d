"""Template values: what variables are bound to and what evaluation returns.

Three variants:

- ``String``: an unescaped scalar, HTML-escaped when rendered.
- ``RawHTML``: markup in its final form, inserted verbatim.
- ``Array``: a sequence of values, only usable as a ``for`` collection.
  Rendering an array directly is always an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from brace._types import SourceRange
from brace.environment.exceptions import EvaluationError, EvaluationErrorReason
from brace.utils.html import html_escape


@dataclass(frozen=True, slots=True)
class String:
    """Plain text. Escaped on insertion into markup."""

    value: str


@dataclass(frozen=True, slots=True)
class RawHTML:
    """Pre-rendered markup. Inserted without escaping."""

    html: str

    def __html__(self) -> str:
        return self.html

    def __str__(self) -> str:
        return self.html


@dataclass(frozen=True, slots=True)
class Array:
    """Ordered collection of values for ``{ for }`` loops."""

    items: tuple[TemplateValue, ...] = ()

    def __init__(self, items: Iterable[TemplateValue] = ()) -> None:
        object.__setattr__(self, "items", tuple(items))

    def __iter__(self) -> Iterator[TemplateValue]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


TemplateValue = String | RawHTML | Array

_TEMPLATE_VALUE_TYPES = (String, RawHTML, Array)


def to_html(value: TemplateValue, range: SourceRange) -> str:
    """Convert ``value`` to an HTML fragment.

    Args:
        value: Value to insert into markup.
        range: Source range of the expression that produced ``value``,
            reported if it cannot be rendered.

    Raises:
        EvaluationError: ``EXPECTED_HTML_CONVERTIBLE`` for arrays.
    """
    if isinstance(value, RawHTML):
        return value.html
    if isinstance(value, String):
        return html_escape(value.value)
    raise EvaluationError(EvaluationErrorReason.EXPECTED_HTML_CONVERTIBLE, range)


def coerce(value: Any) -> TemplateValue:
    """Convert a plain Python value to a ``TemplateValue``.

    - Template values are returned unchanged.
    - Objects with ``__html__`` (Markup-like) become ``RawHTML``.
    - ``str`` becomes ``String``.
    - Lists and tuples become ``Array``, recursively.

    Raises:
        TypeError: For anything else. Numbers and other scalars are not
            stringified implicitly.
    """
    if isinstance(value, _TEMPLATE_VALUE_TYPES):
        return value
    if hasattr(value, "__html__"):
        return RawHTML(value.__html__())
    if isinstance(value, str):
        return String(value)
    if isinstance(value, (list, tuple)):
        return Array(coerce(item) for item in value)
    raise TypeError(
        f"Cannot use {type(value).__name__} as a template value; "
        "expected str, a Markup-like object, or a list of those"
    )
