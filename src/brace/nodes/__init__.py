"""Brace AST nodes.

Node Hierarchy:
    Expression[R] (generic over child type R)
    ├── Variable     { name }
    ├── Tag          <name attr={ value }>body</name>
    └── For          { for name in collection }body{ end }

    AnnotatedExpression   expression + SourceRange (parser output)
    SimpleExpression      expression only (structural comparison, printing)
"""

from brace.nodes.base import AnnotatedExpression, SimpleExpression
from brace.nodes.expressions import Expression, For, Tag, Variable

__all__ = [
    "AnnotatedExpression",
    "Expression",
    "For",
    "SimpleExpression",
    "Tag",
    "Variable",
]
