"""Brace environment: configuration, globals and error types."""

from brace.environment.exceptions import (
    ErrorCode,
    EvaluationError,
    EvaluationErrorReason,
    SourceSnippet,
    TemplateError,
    build_source_snippet,
)
from brace.environment.core import Environment
from brace.environment.registry import GlobalsRegistry
from brace.parser.errors import ParseError, ParseErrorReason

__all__ = [
    "Environment",
    "ErrorCode",
    "EvaluationError",
    "EvaluationErrorReason",
    "GlobalsRegistry",
    "ParseError",
    "ParseErrorReason",
    "SourceSnippet",
    "TemplateError",
    "build_source_snippet",
]
