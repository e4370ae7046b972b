"""Table of named transformations that Function blocks dispatch to."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field

from blockflow.notebook.stream import Stream

logger = logging.getLogger("blockflow.registry")

Transform = Callable[[Stream, dict[str, str]], Awaitable[Stream] | Stream]


@dataclass(frozen=True)
class FunctionSpec:
    key: str
    inputs: dict[str, str]
    transform: Transform = field(compare=False)


class FunctionRegistry:
    """Ordered registration table.

    Keys are not unique. Lookup returns the first registration for a key,
    so a later registration under the same key is shadowed.
    """

    def __init__(self) -> None:
        self._entries: list[FunctionSpec] = []

    def register(self, key: str, inputs: dict[str, str], transform: Transform) -> FunctionSpec:
        spec = FunctionSpec(key=key, inputs=dict(inputs), transform=transform)
        if key in self:
            logger.warning("Function %r already registered; new registration is shadowed", key)
        self._entries.append(spec)
        logger.debug("Registered function %r", key)
        return spec

    def function(self, key: str, inputs: dict[str, str] | None = None) -> Callable[[Transform], Transform]:
        """Decorator form of ``register``."""

        def _decorate(transform: Transform) -> Transform:
            self.register(key, inputs or {}, transform)
            return transform

        return _decorate

    def lookup(self, key: str | None) -> FunctionSpec | None:
        if key is None:
            return None
        for spec in self._entries:
            if spec.key == key:
                return spec
        return None

    def keys(self) -> list[str]:
        """Distinct keys in first-registration order."""
        return list(dict.fromkeys(spec.key for spec in self._entries))

    def __contains__(self, key: object) -> bool:
        return any(spec.key == key for spec in self._entries)

    def __iter__(self) -> Iterator[FunctionSpec]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


_registry: FunctionRegistry | None = None


def get_registry() -> FunctionRegistry:
    """Get the module-level default registry."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = FunctionRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the default registry (for testing)."""
    global _registry  # noqa: PLW0603
    _registry = None
