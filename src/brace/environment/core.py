"""Brace Environment: configuration and entry point for building templates."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from brace.environment.registry import GlobalsRegistry
from brace.parser import ParseError, parse
from brace.template import Template
from brace.values import TemplateValue, coerce

logger = logging.getLogger(__name__)


class Environment:
    """Configuration shared by templates.

    Attributes:
        globals: Variables visible in every render (``GlobalsRegistry``).
            Render-time values shadow them.
        context_lines: Lines of surrounding source shown in error snippets.

    Example:
        >>> env = Environment(globals={"site": "Brace"})
        >>> env.from_string("<h1>{ site }</h1>").render()
        '<h1>Brace</h1>'
    """

    def __init__(
        self,
        *,
        globals: Mapping[str, Any] | None = None,
        context_lines: int = 2,
    ) -> None:
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self._globals: dict[str, TemplateValue] = {
            name: coerce(value) for name, value in (globals or {}).items()
        }
        self.context_lines = context_lines

    @property
    def globals(self) -> GlobalsRegistry:
        return GlobalsRegistry(self)

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Parse ``source`` into a Template.

        Raises:
            ParseError: If the source is not a valid template.
        """
        try:
            tree = parse(source, name=name)
        except ParseError as exc:
            exc.attach_source(source, name, context_lines=self.context_lines)
            raise
        logger.debug(
            "Parsed template %s (%d nodes)", name or "<template>", sum(1 for _ in tree.walk())
        )
        return Template(self, tree, source, name)
