"""Tree node wrappers for Brace.

``AnnotatedExpression`` is what the parser produces and the evaluator
consumes: every node carries the ``SourceRange`` it was parsed from.
``SimpleExpression`` is the same shape without ranges, used to compare and
print trees structurally. Nodes are immutable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from brace._types import SourceRange
from brace.nodes.expressions import Expression, For, Tag, Variable


@dataclass(frozen=True, slots=True)
class AnnotatedExpression:
    """Expression node annotated with its source range."""

    expression: Expression[AnnotatedExpression]
    range: SourceRange

    @property
    def simple(self) -> SimpleExpression:
        """This tree with every range discarded."""
        return SimpleExpression(self.expression.map_children(lambda child: child.simple))

    def walk(self) -> Iterator[AnnotatedExpression]:
        """Yield this node and all descendants, depth-first in source order."""
        yield self
        for child in self.expression.children():
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class SimpleExpression:
    """Structural-only expression tree.

    Build trees by hand with the class constructors:

        >>> SimpleExpression.tag("p", body=[SimpleExpression.variable("title")])
        SimpleExpression(tag(p, [], [variable(title)]))
    """

    expression: Expression[SimpleExpression]

    @classmethod
    def variable(cls, name: str) -> SimpleExpression:
        return cls(Variable(name))

    @classmethod
    def tag(
        cls,
        name: str,
        attributes: Mapping[str, SimpleExpression] | Iterable[tuple[str, SimpleExpression]] = (),
        body: Iterable[SimpleExpression] = (),
    ) -> SimpleExpression:
        if isinstance(attributes, Mapping):
            attributes = attributes.items()
        return cls(Tag(name, attributes=tuple(attributes), body=tuple(body)))

    @classmethod
    def for_(
        cls,
        variable_name: str,
        collection: SimpleExpression,
        body: Iterable[SimpleExpression] = (),
    ) -> SimpleExpression:
        return cls(For(variable_name, collection=collection, body=tuple(body)))

    def __str__(self) -> str:
        expr = self.expression
        if isinstance(expr, Variable):
            return f"variable({expr.name})"
        if isinstance(expr, Tag):
            attrs = ", ".join(f"{key}={value}" for key, value in expr.attributes)
            body = ", ".join(str(child) for child in expr.body)
            return f"tag({expr.name}, [{attrs}], [{body}])"
        body = ", ".join(str(child) for child in expr.body)
        return f"for({expr.variable_name}, {expr.collection}, [{body}])"

    def __repr__(self) -> str:
        return f"SimpleExpression({self})"

    def to_source(self) -> str:
        """Print canonical template source that parses back to this tree.

        Raises:
            ValueError: If an attribute value or loop collection is not a
                variable, which the grammar cannot express.
        """
        expr = self.expression
        if isinstance(expr, Variable):
            return f"{{ {expr.name} }}"
        if isinstance(expr, Tag):
            attrs = "".join(
                f" {key}={value._inline_source()}" for key, value in expr.attributes
            )
            body = "".join(child.to_source() for child in expr.body)
            return f"<{expr.name}{attrs}>{body}</{expr.name}>"
        body = "".join(child.to_source() for child in expr.body)
        collection = expr.collection._inline_name()
        return f"{{ for {expr.variable_name} in {collection} }}{body}{{ end }}"

    def _inline_name(self) -> str:
        if not isinstance(self.expression, Variable):
            raise ValueError(f"Only variables can appear in expression position, got {self}")
        return self.expression.name

    def _inline_source(self) -> str:
        return f"{{ {self._inline_name()} }}"
