"""Pytest configuration and fixtures for Brace tests."""

import pytest

from brace import Environment, EvaluationContext, SourceRange, coerce
from brace.environment import terminal


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch):
    """Disable ANSI colors so error messages compare as plain text."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def env():
    """Create a basic Brace Environment."""
    return Environment()


@pytest.fixture
def env_with_globals():
    """Create a Brace Environment with site-wide globals."""
    return Environment(globals={"site": "Brace", "nav": ["Home", "About"]})


def make_context(**values) -> EvaluationContext:
    """Build an EvaluationContext from plain Python values."""
    return EvaluationContext({name: coerce(value) for name, value in values.items()})


def range_of(source: str, needle: str, occurrence: int = 0) -> SourceRange:
    """Return the range of the ``occurrence``-th appearance of ``needle`` in ``source``.

    Args:
        source: The template source.
        needle: Substring to locate.
        occurrence: 0-based index of the appearance to use.
    """
    start = -1
    for _ in range(occurrence + 1):
        start = source.index(needle, start + 1)
    return SourceRange(start, start + len(needle))
