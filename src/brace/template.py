"""Brace Template: a parsed tree ready for evaluation.

Templates are immutable; ``evaluate()`` and ``render()`` create only
local state, so one Template can be rendered from several threads.

Error Enhancement:
    Evaluation errors are enriched with the template source and name
    before they propagate, so ``str(error)`` shows the offending line:

        Runtime Error: Undefined variable 'title'
          --> page.html:1:5
             |
        >  1 | <p>{ title }</p>
             |      ^~~~~
             |
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from brace.environment.exceptions import EvaluationError
from brace.evaluator import EvaluationContext, evaluate
from brace.values import TemplateValue, coerce, to_html

if TYPE_CHECKING:
    from brace.environment import Environment
    from brace.nodes import AnnotatedExpression

logger = logging.getLogger(__name__)


class Template:
    """Parsed template bound to its Environment.

    Attributes:
        name: Template identifier (for error messages).
        source: Template source text.
        tree: Range-annotated expression tree.

    Example:
        >>> t = env.from_string("{ for x in xs }<li>{ x }</li>{ end }")
        >>> t.render(xs=["a", "b & c"])
        '<li>a</li><li>b &amp; c</li>'
    """

    __slots__ = ("_env", "_name", "_source", "_tree")

    def __init__(
        self,
        env: Environment,
        tree: AnnotatedExpression,
        source: str,
        name: str | None = None,
    ) -> None:
        self._env = env
        self._tree = tree
        self._source = source
        self._name = name

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def source(self) -> str:
        return self._source

    @property
    def tree(self) -> AnnotatedExpression:
        return self._tree

    def _context(self, values: Mapping[str, Any]) -> EvaluationContext:
        merged = dict(self._env.globals.items())
        merged.update((name, coerce(value)) for name, value in values.items())
        return EvaluationContext(merged)

    def evaluate(self, context: Mapping[str, Any] | None = None) -> TemplateValue:
        """Evaluate the tree and return the raw ``TemplateValue``.

        ``context`` may be an ``EvaluationContext`` or any mapping of names
        to values; environment globals sit underneath it.

        Raises:
            EvaluationError: With the template source attached.
        """
        ctx = self._context(context or {})
        try:
            return evaluate(self._tree, ctx)
        except EvaluationError as exc:
            logger.debug(
                "Evaluation of %s failed: %s at %d..%d",
                self._name or "<template>",
                exc.reason.name,
                exc.range.start,
                exc.range.end,
            )
            exc.attach_source(self._source, self._name, context_lines=self._env.context_lines)
            raise

    def render(self, *args: Any, **kwargs: Any) -> str:
        """Render the template to an HTML string.

        Accepts the same arguments as ``dict()``. Plain values are coerced:
        ``str`` to String, Markup-like objects to RawHTML, lists to Array.

        Raises:
            EvaluationError: If evaluation fails or the result is an array.
            TypeError: If a value cannot be used as a template value.
        """
        value = self.evaluate(dict(*args, **kwargs))
        try:
            return to_html(value, self._tree.range)
        except EvaluationError as exc:
            exc.attach_source(self._source, self._name, context_lines=self._env.context_lines)
            raise

    def __repr__(self) -> str:
        return f"<Template {self._name or '<string>'}>"
