"""Tree-walking evaluator for Brace.

Walks an ``AnnotatedExpression`` against an ``EvaluationContext`` and
returns a ``TemplateValue``. Evaluation is fail-fast: the first failing
sub-expression raises ``EvaluationError`` with that sub-expression's range,
and no partial output is returned.

Scoping:
    Contexts are immutable. Each ``for`` iteration derives a child context
    with the loop variable bound (shadowing any outer binding); the parent
    is never touched, so bindings cannot leak into sibling iterations or
    back to the caller.

Dispatch:
    O(1) lookup from expression variant type to handler.

Depth:
    Body children are walked one level below their parent. A node at level
    ``MAX_NESTING_DEPTH`` (the root is level 0) raises ``NESTING_TOO_DEEP``
    over its range instead of exhausting the interpreter stack.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

from brace.environment.exceptions import EvaluationError, EvaluationErrorReason
from brace.nodes import AnnotatedExpression, For, Tag, Variable
from brace.utils.constants import MAX_NESTING_DEPTH
from brace.utils.html import attribute_escape
from brace.values import Array, RawHTML, String, TemplateValue, to_html


class EvaluationContext(Mapping[str, TemplateValue]):
    """Immutable mapping from variable names to template values.

    Example:
        >>> ctx = EvaluationContext({"title": String("Hello")})
        >>> inner = ctx.child("title", String("Shadowed"))
        >>> ctx["title"], inner["title"]
        (String(value='Hello'), String(value='Shadowed'))
    """

    __slots__ = ("_values",)

    _values: Mapping[str, TemplateValue]

    def __init__(self, values: Mapping[str, TemplateValue] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def child(self, name: str, value: TemplateValue) -> EvaluationContext:
        """Derive a context with ``name`` bound to ``value``.

        The new binding is layered over this context's read-only bindings,
        so creating a child costs O(1) and leaves this context unchanged.
        """
        derived = EvaluationContext.__new__(EvaluationContext)
        derived._values = ChainMap({name: value}, self._values)
        return derived

    def evaluate(self, node: AnnotatedExpression) -> TemplateValue:
        """Evaluate ``node`` in this context. See ``evaluate()``."""
        return evaluate(node, self)

    def __getitem__(self, name: str) -> TemplateValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EvaluationContext({dict(self._values)!r})"


def evaluate(node: AnnotatedExpression, context: EvaluationContext) -> TemplateValue:
    """Evaluate an annotated tree against ``context``.

    Returns:
        ``String`` or ``RawHTML`` for a variable (whatever it is bound to,
        unescaped), ``RawHTML`` for tags and loops.

    Raises:
        EvaluationError: ``VARIABLE_MISSING``, ``EXPECTED_STRING``,
            ``EXPECTED_ARRAY`` or ``EXPECTED_HTML_CONVERTIBLE``, ranged
            over the failing sub-expression. ``NESTING_TOO_DEEP`` for
            trees nested deeper than ``MAX_NESTING_DEPTH``.
    """
    return _evaluate(node, context, 0)


def _evaluate(node: AnnotatedExpression, context: EvaluationContext, depth: int) -> TemplateValue:
    if depth >= MAX_NESTING_DEPTH:
        raise EvaluationError(
            EvaluationErrorReason.NESTING_TOO_DEEP, node.range, str(MAX_NESTING_DEPTH)
        )
    return _HANDLERS[type(node.expression)](node, context, depth)


def _evaluate_variable(
    node: AnnotatedExpression, context: EvaluationContext, depth: int
) -> TemplateValue:
    name = node.expression.name
    try:
        return context[name]
    except KeyError:
        raise EvaluationError(
            EvaluationErrorReason.VARIABLE_MISSING,
            node.range,
            name,
            available_names=frozenset(context),
        ) from None


def _evaluate_tag(node: AnnotatedExpression, context: EvaluationContext, depth: int) -> TemplateValue:
    tag: Tag[AnnotatedExpression] = node.expression
    body = _render_body(tag.body, context, depth + 1)

    buf: list[str] = []
    for name, value_node in tag.attributes:
        value = _evaluate(value_node, context, depth)
        if not isinstance(value, String):
            raise EvaluationError(EvaluationErrorReason.EXPECTED_STRING, value_node.range)
        buf.append(f' {name}="{attribute_escape(value.value)}"')

    return RawHTML(f"<{tag.name}{''.join(buf)}>{body}</{tag.name}>")


def _evaluate_for(node: AnnotatedExpression, context: EvaluationContext, depth: int) -> TemplateValue:
    loop: For[AnnotatedExpression] = node.expression
    collection = _evaluate(loop.collection, context, depth)
    if not isinstance(collection, Array):
        raise EvaluationError(EvaluationErrorReason.EXPECTED_ARRAY, loop.collection.range)

    buf: list[str] = []
    for item in collection.items:
        buf.append(_render_body(loop.body, context.child(loop.variable_name, item), depth + 1))
    return RawHTML("".join(buf))


def _render_body(
    body: tuple[AnnotatedExpression, ...], context: EvaluationContext, depth: int
) -> str:
    """Evaluate body children at ``depth`` in order and join their HTML fragments."""
    return "".join(to_html(_evaluate(child, context, depth), child.range) for child in body)


_HANDLERS: dict[type, Callable[[AnnotatedExpression, EvaluationContext, int], TemplateValue]] = {
    Variable: _evaluate_variable,
    Tag: _evaluate_tag,
    For: _evaluate_for,
}
