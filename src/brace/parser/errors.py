"""Parser error handling for Brace.

Provides ParseError, located at the exact offset where an expectation
failed, with source snippet and caret once the source is attached.
"""

from __future__ import annotations

from enum import Enum

from brace.environment.exceptions import ErrorCode, TemplateError


class ParseErrorReason(Enum):
    """Why parsing failed. ``{detail}`` is filled from the error's detail."""

    EXPECTED = "Expected '{detail}'"
    EXPECTED_CLOSING_TAG = "Expected closing tag '</{detail}>'"
    EXPECTED_IDENTIFIER = "Expected identifier"
    EXPECTED_TAG_NAME = "Expected tag name"
    EXPECTED_ATTRIBUTE_NAME = "Expected attribute name"
    UNEXPECTED_REMAINDER = "Unexpected input, expected '{{' or '<'"
    NESTING_TOO_DEEP = "Template nesting exceeds {detail} levels"

    @property
    def code(self) -> ErrorCode:
        return _PARSE_CODES[self]


_PARSE_CODES = {
    ParseErrorReason.EXPECTED: ErrorCode.EXPECTED_TOKEN,
    ParseErrorReason.EXPECTED_CLOSING_TAG: ErrorCode.UNCLOSED_TAG,
    ParseErrorReason.EXPECTED_IDENTIFIER: ErrorCode.INVALID_IDENTIFIER,
    ParseErrorReason.EXPECTED_TAG_NAME: ErrorCode.INVALID_TAG_NAME,
    ParseErrorReason.EXPECTED_ATTRIBUTE_NAME: ErrorCode.INVALID_ATTRIBUTE_NAME,
    ParseErrorReason.UNEXPECTED_REMAINDER: ErrorCode.UNEXPECTED_INPUT,
    ParseErrorReason.NESTING_TOO_DEEP: ErrorCode.NESTING_TOO_DEEP,
}


class ParseError(TemplateError):
    """Parse-time error at a single source offset.

    Displays errors with source snippets and a caret under the failing
    character:

        Syntax Error: Expected '}'
          --> <template>:1:8
             |
        >  1 | { title
             |        ^
             |

    Attributes:
        reason: ParseErrorReason.
        detail: Reason payload (the expected literal or the unclosed tag name).
        offset: Cursor position when the expectation failed.
    """

    label = "Syntax Error"

    def __init__(self, reason: ParseErrorReason, offset: int, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        self.offset = offset
        self.code = reason.code
        super().__init__(reason.value.format(detail=detail))

    def _span(self) -> tuple[int, int]:
        return self.offset, 1
