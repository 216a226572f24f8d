"""Globals registry for the Brace environment.

Provides a dict-like interface over ``Environment`` globals.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, Mapping
from typing import TYPE_CHECKING, Any

from brace.values import TemplateValue, coerce

if TYPE_CHECKING:
    from brace.environment.core import Environment


class GlobalsRegistry:
    """Dict-like view of the variables visible in every render.

    Supports:
        - env.globals['site'] = "My Site"
        - env.globals.update({'nav': ["Home", "About"]})
        - value = env.globals['site']
        - 'site' in env.globals

    Assigned values are coerced to template values. All mutations use
    copy-on-write, so templates rendering concurrently always see a
    complete snapshot.
    """

    __slots__ = ("_env",)

    def __init__(self, env: Environment):
        self._env = env

    def _get_dict(self) -> dict[str, TemplateValue]:
        return self._env._globals

    def _set_dict(self, d: dict[str, TemplateValue]) -> None:
        self._env._globals = d

    def __getitem__(self, name: str) -> TemplateValue:
        return self._get_dict()[name]

    def __setitem__(self, name: str, value: Any) -> None:
        new = self._get_dict().copy()
        new[name] = coerce(value)
        self._set_dict(new)

    def __delitem__(self, name: str) -> None:
        new = self._get_dict().copy()
        del new[name]
        self._set_dict(new)

    def __contains__(self, name: object) -> bool:
        return name in self._get_dict()

    def __iter__(self) -> Iterator[str]:
        return iter(self._get_dict())

    def __len__(self) -> int:
        return len(self._get_dict())

    def get(self, name: str, default: TemplateValue | None = None) -> TemplateValue | None:
        return self._get_dict().get(name, default)

    def update(self, mapping: Mapping[str, Any]) -> None:
        """Batch update globals."""
        new = self._get_dict().copy()
        new.update((name, coerce(value)) for name, value in mapping.items())
        self._set_dict(new)

    def copy(self) -> dict[str, TemplateValue]:
        """Return a copy of the underlying dict."""
        return self._get_dict().copy()

    def keys(self) -> KeysView[str]:
        return self._get_dict().keys()

    def items(self) -> ItemsView[str, TemplateValue]:
        return self._get_dict().items()
