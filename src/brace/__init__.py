"""Brace: a minimal HTML templating language.

Templates mix markup tags with brace-delimited expressions:

    >>> from brace import Environment
    >>> env = Environment()
    >>> t = env.from_string("<ul>{ for item in items }<li>{ item }</li>{ end }</ul>")
    >>> t.render(items=["Tea", "Milk & Honey"])
    '<ul><li>Tea</li><li>Milk &amp; Honey</li></ul>'

Lower-level API (pure functions, no environment):

    >>> from brace import EvaluationContext, String, parse
    >>> tree = parse("<div id={ name }></div>")
    >>> EvaluationContext({"name": String('a "b"')}).evaluate(tree)
    RawHTML(html='<div id="a &quot;b&quot;"></div>')

Architecture:
Template Source → Parser → AnnotatedExpression → Evaluator (+ context) → TemplateValue

Pipeline stages:
1. **Parser**: fused scanner/recursive-descent parser producing a tree in
   which every node records its source range
2. **Evaluator**: walks the tree against an immutable EvaluationContext
3. **Template**: wraps a tree with ``render()`` and error enrichment

Syntax:
- ``{ name }``: variable reference
- ``<tag attr={ name }>...</tag>``: element; attribute values are always
  brace expressions
- ``{ for item in items }...{ end }``: loop over an array

Escaping is decided by value type: ``String`` values are escaped
(``& < >`` in body text, ``"`` in attributes), ``RawHTML`` is inserted
verbatim, and ``Array`` cannot be rendered at all.

Errors:
Both phases fail fast. ``ParseError`` carries the exact offset where an
expectation failed; ``EvaluationError`` carries the range of the failing
sub-expression.

Thread-Safety:
Trees, values, contexts and templates are immutable, and evaluation keeps
only local state, so rendering is safe from any number of threads.
"""

from brace._types import SourceRange, line_and_column
from brace.environment import (
    Environment,
    ErrorCode,
    EvaluationError,
    EvaluationErrorReason,
    GlobalsRegistry,
    ParseError,
    ParseErrorReason,
    SourceSnippet,
    TemplateError,
    build_source_snippet,
)
from brace.evaluator import EvaluationContext, evaluate
from brace.nodes import AnnotatedExpression, Expression, For, SimpleExpression, Tag, Variable
from brace.parser import Parser, parse
from brace.template import Template
from brace.utils.html import attribute_escape, html_escape
from brace.values import Array, RawHTML, String, TemplateValue, coerce, to_html

__version__ = "0.1.0"

__all__ = [
    "AnnotatedExpression",
    "Array",
    "Environment",
    "ErrorCode",
    "EvaluationContext",
    "EvaluationError",
    "EvaluationErrorReason",
    "Expression",
    "For",
    "GlobalsRegistry",
    "ParseError",
    "ParseErrorReason",
    "Parser",
    "RawHTML",
    "SimpleExpression",
    "SourceRange",
    "SourceSnippet",
    "String",
    "Tag",
    "Template",
    "TemplateError",
    "TemplateValue",
    "Variable",
    "__version__",
    "attribute_escape",
    "build_source_snippet",
    "coerce",
    "evaluate",
    "html_escape",
    "line_and_column",
    "parse",
    "to_html",
]


# Free-threading declaration (PEP 703)
def __getattr__(name: str) -> object:
    """Module-level getattr for the free-threading declaration."""
    if name == "_Py_mod_gil":
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'brace' has no attribute {name!r}")
