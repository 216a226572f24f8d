"""Benchmarks for HTML escaping functions.

Run with: pytest benchmarks/benchmark_escape.py --benchmark-only

Or with detailed output:
    pytest benchmarks/benchmark_escape.py --benchmark-only --benchmark-verbose

Requirements:
    pip install pytest-benchmark
"""

from __future__ import annotations

import pytest

from brace.utils.html import attribute_escape, html_escape


# =============================================================================
# html_escape benchmarks
# =============================================================================


def test_escape_no_special(benchmark: pytest.BenchmarkFixture) -> None:
    """Fast path: no special characters."""
    benchmark(html_escape, "Hello World no special chars here at all")


def test_escape_single_char(benchmark: pytest.BenchmarkFixture) -> None:
    """Single escapable character."""
    benchmark(html_escape, "Hello & World")


def test_escape_many_special_chars(benchmark: pytest.BenchmarkFixture) -> None:
    """Many special characters."""
    benchmark(html_escape, "<script>alert('xss');</script>" * 10)


def test_escape_long_plain(benchmark: pytest.BenchmarkFixture) -> None:
    """Long text with no special characters."""
    benchmark(html_escape, "lorem ipsum dolor sit amet " * 400)


# =============================================================================
# attribute_escape benchmarks
# =============================================================================


def test_attribute_escape_no_quote(benchmark: pytest.BenchmarkFixture) -> None:
    benchmark(attribute_escape, "btn btn-primary <large> & wide")


def test_attribute_escape_quotes(benchmark: pytest.BenchmarkFixture) -> None:
    benchmark(attribute_escape, 'say "hi" and "bye"' * 10)
