"""Source positions shared by the parser, the evaluator and error reporting."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceRange:
    """Half-open interval ``[start, end)`` of character offsets into a template source.

    Ranges are used for diagnostics only. They always span exactly the text
    that produced a node, so ``source[r.start:r.end]`` recovers it.

    Example:
        >>> r = SourceRange(5, 10)
        >>> r.text("<p>{ title }</p>")
        'title'
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid source range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Return the slice of ``source`` covered by this range."""
        return source[self.start : self.end]


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Map a character offset to a 1-based line number and 0-based column."""
    offset = min(max(offset, 0), len(source))
    lineno = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return lineno, offset - line_start
