"""Shared constants for Brace."""

from __future__ import annotations

# Deepest node nesting the parser accepts and the evaluator walks. Both are
# recursive; the limit keeps them well inside the default recursion limit.
MAX_NESTING_DEPTH: int = 100
