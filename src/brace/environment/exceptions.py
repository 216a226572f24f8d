"""Exceptions for the Brace template system.

Exception Hierarchy:
TemplateError (base)
├── ParseError          # Parse-time error at a source offset (brace.parser.errors)
└── EvaluationError     # Evaluation error over a source range

Both phases fail fast: the first error aborts the call and no partial tree
or output is returned. Every error keeps its location (``offset`` or
``range``) so callers can point at the original source text. When the
source is attached, the message includes a snippet:

    ```
    Runtime Error: Undefined variable 'titel'
      --> page.html:1:5
         |
    >  1 | <p>{ titel }</p>
         |      ^~~~~
         |
      Hint: Did you mean 'title'?
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from brace._types import SourceRange, line_and_column
from brace.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for Brace template errors.

    Format: B-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (runtime)
    """

    # Parser errors (B-PAR-xxx)
    EXPECTED_TOKEN = "B-PAR-001"
    UNCLOSED_TAG = "B-PAR-002"
    INVALID_IDENTIFIER = "B-PAR-003"
    INVALID_TAG_NAME = "B-PAR-004"
    INVALID_ATTRIBUTE_NAME = "B-PAR-005"
    UNEXPECTED_INPUT = "B-PAR-006"
    NESTING_TOO_DEEP = "B-PAR-007"

    # Runtime errors (B-RUN-xxx)
    UNDEFINED_VARIABLE = "B-RUN-001"
    EXPECTED_STRING = "B-RUN-002"
    EXPECTED_ARRAY = "B-RUN-003"
    NOT_HTML_CONVERTIBLE = "B-RUN-004"
    DEPTH_EXCEEDED = "B-RUN-005"

    @property
    def category(self) -> str:
        """Error category ('parser' or 'runtime')."""
        prefix = self.value.split("-")[1]
        return {"PAR": "parser", "RUN": "runtime"}.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional 0-based column for the pointer.
        width: Number of characters to underline, starting at ``column``.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None
    width: int = 1

    def format(self) -> str:
        """Format snippet in Rust-inspired diagnostic style."""
        gutter = terminal.dim_text("     |")
        parts: list[str] = [gutter]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
            if is_error and self.column is not None:
                pointer = " " * self.column + "^" + "~" * (self.width - 1)
                parts.append(f"{gutter} {terminal.error_line(pointer)}")
        parts.append(gutter)
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
    width: int = 1,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for the pointer.
        width: Underline width; clipped to the end of the error line.
    """
    all_lines = source.split("\n")
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    if column is not None and 0 < error_line <= len(all_lines):
        width = max(1, min(width, len(all_lines[error_line - 1]) - column))
    return SourceSnippet(lines=lines, error_line=error_line, column=column, width=width)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateError(Exception):
    """Base exception for all Brace template errors.

    Subclasses report a location as a ``(start, width)`` pair through
    ``_span()`` and a one-line ``message``; the base class renders the
    location and source snippet once the template source is known.

        >>> try:
        ...     template.render()
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode for searchable error identification.
        source: Template source, once attached.
        name: Template name for messages, once attached.
        context_lines: Lines of context around the error line in snippets.
        suggestion: Plain-text "Did you mean" candidate, or None.
    """

    code: ErrorCode | None = None
    label: str = "Template Error"

    def __init__(self, message: str) -> None:
        self.message = message
        self.source: str | None = None
        self.name: str | None = None
        self.context_lines = 2
        self.suggestion: str | None = None
        super().__init__(message)

    def _span(self) -> tuple[int, int]:
        raise NotImplementedError

    def attach_source(
        self, source: str, name: str | None = None, *, context_lines: int | None = None
    ) -> TemplateError:
        """Attach the template source so messages can show a snippet. Returns self."""
        self.source = source
        if name is not None:
            self.name = name
        if context_lines is not None:
            self.context_lines = context_lines
        return self

    @property
    def lineno(self) -> int | None:
        """1-based line of the error, when the source is known."""
        if self.source is None:
            return None
        return line_and_column(self.source, self._span()[0])[0]

    @property
    def col_offset(self) -> int | None:
        """0-based column of the error, when the source is known."""
        if self.source is None:
            return None
        return line_and_column(self.source, self._span()[0])[1]

    def _location(self) -> str:
        location = self.name or "<template>"
        if self.source is None:
            start, width = self._span()
            if width > 1:
                return f"{location} at offset {start}..{start + width}"
            return f"{location} at offset {start}"
        return f"{location}:{self.lineno}:{self.col_offset}"

    def snippet(self) -> SourceSnippet | None:
        """Source snippet around the error, or None without a source."""
        if self.source is None:
            return None
        start, width = self._span()
        lineno, column = line_and_column(self.source, start)
        return build_source_snippet(
            self.source,
            lineno,
            context_lines=self.context_lines,
            column=column,
            width=width,
        )

    def _hint(self) -> str:
        return f"  {terminal.hint('Hint:')} Did you mean '{terminal.suggestion(self.suggestion or '')}'?"

    def __str__(self) -> str:
        parts = [f"{self.label}: {self.message}", f"  --> {terminal.location(self._location())}"]
        snippet = self.snippet()
        if snippet is not None:
            parts.append(snippet.format())
        if self.suggestion:
            parts.append(self._hint())
        return "\n".join(parts)

    def format_compact(self) -> str:
        """Format error as a coded terminal diagnostic without traceback noise.

        Format::

            B-RUN-001: Undefined variable 'usernme'
              --> base.html:3:6
                 |
            >  3 | <h1>{ usernme }</h1>
                 |       ^~~~~~~
                 |
              Hint: Did you mean 'username'?
        """
        code = self.code.value if self.code else None
        parts = [
            terminal.format_error_header(code, self.message),
            f"  --> {terminal.location(self._location())}",
        ]
        snippet = self.snippet()
        if snippet is not None:
            parts.append(snippet.format())
        if self.suggestion:
            parts.append(self._hint())
        return "\n".join(parts)


class EvaluationErrorReason(Enum):
    """Why evaluation failed. ``{detail}`` is filled from the error's detail."""

    VARIABLE_MISSING = "Undefined variable '{detail}'"
    EXPECTED_STRING = "Expected a string value for this attribute"
    EXPECTED_ARRAY = "Expected an array to loop over"
    EXPECTED_HTML_CONVERTIBLE = "Arrays cannot be rendered as HTML"
    NESTING_TOO_DEEP = "Template nesting exceeds {detail} levels"

    @property
    def code(self) -> ErrorCode:
        return _EVALUATION_CODES[self]


_EVALUATION_CODES = {
    EvaluationErrorReason.VARIABLE_MISSING: ErrorCode.UNDEFINED_VARIABLE,
    EvaluationErrorReason.EXPECTED_STRING: ErrorCode.EXPECTED_STRING,
    EvaluationErrorReason.EXPECTED_ARRAY: ErrorCode.EXPECTED_ARRAY,
    EvaluationErrorReason.EXPECTED_HTML_CONVERTIBLE: ErrorCode.NOT_HTML_CONVERTIBLE,
    EvaluationErrorReason.NESTING_TOO_DEEP: ErrorCode.DEPTH_EXCEEDED,
}


class EvaluationError(TemplateError):
    """Evaluation failed on a specific sub-expression.

    ``range`` is the range of the node that caused the failure (the missing
    variable, the attribute value, the loop collection, the body child),
    never the whole template.

    If ``available_names`` is given for a missing variable, a "Did you
    mean?" hint is shown when a close match exists. The candidate is kept
    plain in ``suggestion`` and only coloured when the error is formatted.

    Attributes:
        reason: EvaluationErrorReason.
        detail: Reason payload (the variable name for VARIABLE_MISSING).
        range: SourceRange of the failing node.
    """

    label = "Runtime Error"

    def __init__(
        self,
        reason: EvaluationErrorReason,
        range: SourceRange,
        detail: str | None = None,
        *,
        available_names: frozenset[str] | None = None,
    ) -> None:
        self.reason = reason
        self.detail = detail
        self.range = range
        self.code = reason.code
        super().__init__(reason.value.format(detail=detail))
        if available_names and detail is not None:
            from difflib import get_close_matches

            matches = get_close_matches(detail, available_names, n=1, cutoff=0.6)
            if matches:
                self.suggestion = matches[0]

    def _span(self) -> tuple[int, int]:
        return self.range.start, len(self.range)

