"""Expression variants for the Brace syntax tree.

There is a single definition of the three variants, generic over the child
type ``R``. The parser instantiates it with ``AnnotatedExpression`` children
(every node knows its source range); stripping annotations instantiates it
with ``SimpleExpression`` children. ``map_children`` is the structure
preserving transform between the two.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

R = TypeVar("R")
B = TypeVar("B")


@dataclass(frozen=True, slots=True)
class Variable(Generic[R]):
    """Variable reference: { name }"""

    name: str

    def children(self) -> Iterator[R]:
        return iter(())

    def map_children(self, transform: Callable[[R], B]) -> Variable[B]:
        return Variable(self.name)


@dataclass(frozen=True, slots=True)
class Tag(Generic[R]):
    """Markup element: <name attr={ value }>body</name>

    ``attributes`` is an ordered tuple of ``(name, value)`` pairs in source
    order; rendered output lists them in that order.
    """

    name: str
    attributes: tuple[tuple[str, R], ...] = ()
    body: tuple[R, ...] = ()

    def attribute(self, name: str) -> R | None:
        """Return the value bound to attribute ``name``, or None."""
        for key, value in self.attributes:
            if key == name:
                return value
        return None

    def children(self) -> Iterator[R]:
        for _, value in self.attributes:
            yield value
        yield from self.body

    def map_children(self, transform: Callable[[R], B]) -> Tag[B]:
        return Tag(
            self.name,
            attributes=tuple((key, transform(value)) for key, value in self.attributes),
            body=tuple(transform(child) for child in self.body),
        )


@dataclass(frozen=True, slots=True)
class For(Generic[R]):
    """For loop: { for name in collection }...{ end }"""

    variable_name: str
    collection: R
    body: tuple[R, ...] = ()

    def children(self) -> Iterator[R]:
        yield self.collection
        yield from self.body

    def map_children(self, transform: Callable[[R], B]) -> For[B]:
        return For(
            self.variable_name,
            collection=transform(self.collection),
            body=tuple(transform(child) for child in self.body),
        )


Expression = Variable[R] | Tag[R] | For[R]
