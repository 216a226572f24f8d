"""Property-based tests for the Brace parser and evaluator.

Uses hypothesis to verify invariants that must hold for *all* inputs:

- parse -> strip is deterministic and survives printing and re-parsing
- Every node's range covers exactly the text that produced it
- Arbitrary input either parses or raises ParseError, nothing else, even
  when nested far beyond the depth limit
- String values never inject markup
- Loop bindings never leak
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from brace import (
    AnnotatedExpression,
    Array,
    EvaluationContext,
    EvaluationError,
    EvaluationErrorReason,
    ParseError,
    ParseErrorReason,
    RawHTML,
    SourceRange,
    String,
    Tag,
    Variable,
    evaluate,
    html_escape,
    parse,
)

from .strategies import (
    arbitrary_template_source,
    html_special_text,
    identifier,
    plain_text,
    simple_tree,
    template_source,
)


class TestParserProperties:
    """Property-based parser invariants."""

    @given(tree=simple_tree)
    @settings(max_examples=200)
    def test_printed_tree_parses_back(self, tree) -> None:
        """Canonical source of a structural tree parses to the same tree."""
        assert parse(tree.to_source()).simple == tree

    @given(source=template_source)
    @settings(max_examples=200)
    def test_strip_is_idempotent(self, source: str) -> None:
        """Re-parsing the stripped form equals the original stripped tree."""
        stripped = parse(source).simple
        assert parse(stripped.to_source()).simple == stripped

    @given(source=template_source)
    @settings(max_examples=200)
    def test_parse_is_deterministic(self, source: str) -> None:
        assert parse(source) == parse(source)

    @given(source=template_source)
    @settings(max_examples=200)
    def test_ranges_cover_node_text(self, source: str) -> None:
        for node in parse(source).walk():
            text = node.range.text(source)
            if isinstance(node.expression, Variable):
                assert text == node.expression.name
            elif isinstance(node.expression, Tag):
                assert text.startswith(f"<{node.expression.name}")
                assert text.endswith(f"</{node.expression.name}>")
            else:
                assert text.startswith("for")

    @given(source=template_source)
    @settings(max_examples=100)
    def test_children_nested_within_parent_range(self, source: str) -> None:
        for node in parse(source).walk():
            for child in node.expression.children():
                assert node.range.start <= child.range.start
                assert child.range.end <= node.range.end

    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_no_unhandled_crash(self, source: str) -> None:
        """The parser never raises anything but ParseError.

        Error offsets always point inside the source or at its end.
        """
        try:
            parse(source)
        except ParseError as e:
            assert 0 <= e.offset <= len(source)

    @given(depth=st.integers(min_value=1, max_value=400))
    @settings(max_examples=50)
    def test_deep_nesting_raises_parse_error(self, depth: int) -> None:
        source = "<a>" * depth + "{ x }" + "</a>" * depth
        try:
            tree = parse(source)
        except ParseError as e:
            assert e.reason is ParseErrorReason.NESTING_TOO_DEEP
            assert e.offset == 3 * 100
        else:
            assert depth < 100
            assert tree.range.text(source) == source

    @given(text=plain_text.filter(lambda s: s and s[0] not in "<{"))
    @settings(max_examples=100)
    def test_text_in_body_is_rejected(self, text: str) -> None:
        try:
            parse(f"<p>{text}</p>")
        except ParseError as e:
            assert e.reason is ParseErrorReason.UNEXPECTED_REMAINDER
            assert e.offset == 3
        else:
            raise AssertionError("text inside a body must not parse")


class TestEvaluationProperties:
    """Property-based evaluation invariants."""

    @given(name=identifier, text=html_special_text)
    @settings(max_examples=200)
    def test_top_level_variable_is_unescaped(self, name: str, text: str) -> None:
        ctx = EvaluationContext({name: String(text)})
        assert evaluate(parse(f"{{ {name} }}"), ctx) == String(text)

    @given(text=html_special_text)
    @settings(max_examples=200)
    def test_body_strings_never_inject_markup(self, text: str) -> None:
        result = evaluate(parse("<p>{ x }</p>"), EvaluationContext({"x": String(text)}))
        assert result == RawHTML(f"<p>{html_escape(text)}</p>")
        inner = result.html[len("<p>") : -len("</p>")]
        assert "<" not in inner
        assert ">" not in inner

    @given(text=html_special_text)
    @settings(max_examples=200)
    def test_attribute_strings_never_close_the_quote(self, text: str) -> None:
        result = evaluate(parse("<p id={ x }></p>"), EvaluationContext({"x": String(text)}))
        value = result.html[len('<p id="') : -len('"></p>')]
        assert '"' not in value

    @given(
        items=st.lists(html_special_text, max_size=5),
        outer=html_special_text,
    )
    @settings(max_examples=100)
    def test_loop_binding_never_leaks(self, items: list[str], outer: str) -> None:
        ctx = EvaluationContext(
            {"x": String(outer), "xs": Array(String(item) for item in items)}
        )
        result = evaluate(parse("<div>{ for x in xs }<i>{ x }</i>{ end }<b>{ x }</b></div>"), ctx)
        loop_html = "".join(f"<i>{html_escape(item)}</i>" for item in items)
        assert result == RawHTML(f"<div>{loop_html}<b>{html_escape(outer)}</b></div>")
        assert ctx["x"] == String(outer)

    @given(depth=st.integers(min_value=1, max_value=400))
    @settings(max_examples=50)
    def test_deep_trees_evaluate_or_raise_evaluation_error(self, depth: int) -> None:
        """Hand-built trees deeper than the parser accepts still fail cleanly."""
        node = AnnotatedExpression(Variable("x"), SourceRange(depth, depth + 1))
        for level in reversed(range(depth)):
            node = AnnotatedExpression(Tag("a", body=(node,)), SourceRange(level, level + 1))
        ctx = EvaluationContext({"x": String("y")})
        try:
            result = evaluate(node, ctx)
        except EvaluationError as e:
            assert e.reason is EvaluationErrorReason.NESTING_TOO_DEEP
            assert e.range == SourceRange(100, 101)
        else:
            assert depth < 100
            assert result == RawHTML("<a>" * depth + "y" + "</a>" * depth)
