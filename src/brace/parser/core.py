"""Recursive-descent parser for Brace templates.

Scanning and parsing are fused: the parser walks a single integer cursor
over the immutable source text, left to right, with one token of
lookahead and no backtracking.

Grammar:
    document   := ws node ws
    node       := element | '{' ws statement
    element    := '<' tagName (ws attribute)* ws '>' node* '</' tagName '>'
    attribute  := attrName '=' '{' ws expression ws '}'
    statement  := for | expression ws '}'
    for        := 'for' ws identifier ws 'in' ws expression ws '}' node* '{' ws 'end' ws '}'
    expression := identifier

``for``, ``in`` and ``end`` are not reserved words. They are parsed as
ordinary identifiers and recognised by comparing the parsed name, so a
variable literally named ``for`` or ``end`` cannot be referenced.

Every ParseError carries the cursor offset at the moment an expectation
failed, not the start of the enclosing construct.

Nodes nest at most ``max_depth`` levels deep: a node at level ``max_depth``
(the root is level 0) raises ``NESTING_TOO_DEEP`` at its first character.
"""

from __future__ import annotations

from collections.abc import Callable

from brace._types import SourceRange
from brace.nodes import AnnotatedExpression, For, Tag, Variable
from brace.parser.errors import ParseError, ParseErrorReason
from brace.utils.chars import (
    is_attribute_name_char,
    is_combining_mark,
    is_identifier_char,
    is_tag_name_char,
    is_whitespace,
)
from brace.utils.constants import MAX_NESTING_DEPTH

_FOR_KEYWORD = "for"
_IN_KEYWORD = "in"
_END_KEYWORD = "end"


class Parser:
    """Cursor over a template source producing an ``AnnotatedExpression``.

    A Parser is single-use: ``parse()`` consumes the cursor.

    Example:
        >>> tree = Parser("<p>{ title }</p>").parse()
        >>> tree.range
        SourceRange(start=0, end=16)
    """

    __slots__ = ("_depth", "_length", "_max_depth", "_pos", "_source")

    def __init__(self, source: str, *, max_depth: int = MAX_NESTING_DEPTH) -> None:
        self._source = source
        self._length = len(source)
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    @property
    def offset(self) -> int:
        """Current cursor position."""
        return self._pos

    def parse(self) -> AnnotatedExpression:
        """Parse the whole source as a single root node."""
        self._skip_whitespace()
        root = self._parse_node()
        self._skip_whitespace()
        if not self._at_end:
            raise self._error(ParseErrorReason.UNEXPECTED_REMAINDER)
        return root

    # -- nodes -------------------------------------------------------------

    def _parse_node(self) -> AnnotatedExpression:
        start = self._pos
        if self._depth >= self._max_depth:
            raise self._error(ParseErrorReason.NESTING_TOO_DEEP, str(self._max_depth))
        self._depth += 1
        if self._consume("{"):
            self._skip_whitespace()
            node = self._parse_statement_or_expression()
        elif self._consume("<"):
            node = self._parse_element(start)
        else:
            raise self._error(ParseErrorReason.UNEXPECTED_REMAINDER)
        self._depth -= 1
        return node

    def _parse_element(self, start: int) -> AnnotatedExpression:
        """Parse <name attr={ value }...>body</name>; the '<' is consumed."""
        name = self._parse_tag_name()

        # Repeated attribute names keep their first position and last value
        attributes: dict[str, AnnotatedExpression] = {}
        while not self._at_end:
            self._skip_whitespace()
            if self._consume(">"):
                break
            if not is_attribute_name_char(self._peek()):
                raise self._error(ParseErrorReason.EXPECTED, "attribute or >")
            attribute_name = self._parse_attribute_name()
            self._expect("=")
            self._expect("{")
            self._skip_whitespace()
            value = self._parse_expression()
            self._skip_whitespace()
            self._expect("}")
            attributes[attribute_name] = value

        closing_tag = f"</{name}>"
        body: list[AnnotatedExpression] = []
        while not self._consume(closing_tag):
            if self._at_end:
                raise self._error(ParseErrorReason.EXPECTED_CLOSING_TAG, name)
            body.append(self._parse_node())

        return AnnotatedExpression(
            Tag(name, attributes=tuple(attributes.items()), body=tuple(body)),
            SourceRange(start, self._pos),
        )

    def _parse_statement_or_expression(self) -> AnnotatedExpression:
        """Parse the inside of '{ ... }'; the '{' and leading space are consumed."""
        start = self._pos
        result = self._parse_expression()
        if not _is_variable_named(result, _FOR_KEYWORD):
            self._skip_whitespace()
            self._expect("}")
            return result

        self._skip_whitespace()
        variable_name = self._parse_identifier()
        self._skip_whitespace()
        self._expect_keyword(_IN_KEYWORD)
        self._skip_whitespace()
        collection = self._parse_expression()
        self._skip_whitespace()
        self._expect("}")

        body: list[AnnotatedExpression] = []
        while True:
            if self._at_end:
                raise self._error(ParseErrorReason.EXPECTED, _END_KEYWORD)
            part = self._parse_node()
            if _is_variable_named(part, _END_KEYWORD):
                break
            body.append(part)

        return AnnotatedExpression(
            For(variable_name, collection=collection, body=tuple(body)),
            SourceRange(start, self._pos),
        )

    def _parse_expression(self) -> AnnotatedExpression:
        start = self._pos
        name = self._parse_identifier()
        return AnnotatedExpression(Variable(name), SourceRange(start, self._pos))

    # -- character runs ----------------------------------------------------

    def _parse_identifier(self) -> str:
        return self._parse_run(is_identifier_char, ParseErrorReason.EXPECTED_IDENTIFIER)

    def _parse_tag_name(self) -> str:
        return self._parse_run(is_tag_name_char, ParseErrorReason.EXPECTED_TAG_NAME)

    def _parse_attribute_name(self) -> str:
        return self._parse_run(is_attribute_name_char, ParseErrorReason.EXPECTED_ATTRIBUTE_NAME)

    def _parse_run(self, predicate: Callable[[str], bool], reason: ParseErrorReason) -> str:
        """Consume a maximal non-empty run of characters matching ``predicate``.

        Combining marks extend the run once it has started, so decomposed
        letters (``e`` + U+0301) stay part of the name.
        """
        if not predicate(self._peek()):
            raise self._error(reason)
        return self._take_while(lambda char: predicate(char) or is_combining_mark(char))

    # -- cursor primitives -------------------------------------------------

    @property
    def _at_end(self) -> bool:
        return self._pos >= self._length

    def _peek(self) -> str:
        """Character under the cursor, or '' at end of input."""
        return self._source[self._pos : self._pos + 1]

    def _consume(self, literal: str) -> bool:
        if self._source.startswith(literal, self._pos):
            self._pos += len(literal)
            return True
        return False

    def _expect(self, literal: str) -> None:
        if not self._consume(literal):
            raise self._error(ParseErrorReason.EXPECTED, literal)

    def _expect_keyword(self, keyword: str) -> None:
        start = self._pos
        if self._parse_identifier() != keyword:
            raise ParseError(ParseErrorReason.EXPECTED, start, keyword)

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        source = self._source
        start = pos = self._pos
        while pos < self._length and predicate(source[pos]):
            pos += 1
        self._pos = pos
        return source[start:pos]

    def _skip_whitespace(self) -> None:
        self._take_while(is_whitespace)

    def _error(self, reason: ParseErrorReason, detail: str | None = None) -> ParseError:
        return ParseError(reason, self._pos, detail)


def _is_variable_named(node: AnnotatedExpression, name: str) -> bool:
    expr = node.expression
    return isinstance(expr, Variable) and expr.name == name


def parse(source: str, *, name: str | None = None) -> AnnotatedExpression:
    """Parse ``source`` into a range-annotated expression tree.

    Args:
        source: Template source text.
        name: Template name used in error messages.

    Raises:
        ParseError: On the first syntax error, with the source attached.
    """
    try:
        return Parser(source).parse()
    except ParseError as exc:
        exc.attach_source(source, name)
        raise
