from __future__ import annotations

import json
import os
import platform
import sys
from pathlib import Path

import pytest

from brace import Environment, Template

try:
    import importlib.metadata as importlib_metadata
except ModuleNotFoundError:  # pragma: no cover
    import importlib_metadata  # type: ignore


BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)

MINIMAL_SOURCE = "<p>{ name }</p>"

SMALL_SOURCE = (
    "<div class={ cls }>"
    "<h1>{ title }</h1>"
    "<ul>{ for item in items }<li>{ item }</li>{ end }</ul>"
    "</div>"
)

LARGE_SOURCE = (
    "<table class={ cls }>"
    "{ for row in rows }"
    "<tr>{ for cell in row }<td title={ cell }>{ cell }</td>{ end }</tr>"
    "{ end }"
    "</table>"
)


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "brace": _version("brace-templates"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def brace_env() -> Environment:
    return Environment()


@pytest.fixture(scope="session")
def small_template(brace_env: Environment) -> Template:
    return brace_env.from_string(SMALL_SOURCE, name="small.html")


@pytest.fixture(scope="session")
def large_template(brace_env: Environment) -> Template:
    return brace_env.from_string(LARGE_SOURCE, name="large.html")


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {
        "cls": "card",
        "title": "Groceries & Errands",
        "items": ["Tea", "Milk & Honey", "<b>Bread</b>", "Eggs", "Jam"],
    }


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return {
        "cls": "report",
        "rows": [[f"r{r}c{c} <{r * c}>" for c in range(10)] for r in range(100)],
    }


@pytest.fixture(scope="session")
def template_sources() -> dict[str, str]:
    return {"minimal": MINIMAL_SOURCE, "small": SMALL_SOURCE, "large": LARGE_SOURCE}
