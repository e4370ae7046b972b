"""Built-in transformations."""

from __future__ import annotations

from blockflow.notebook.registry import FunctionRegistry
from blockflow.notebook.stream import Stream


def identity(stream: Stream, params: dict[str, str]) -> Stream:
    return stream


def register_builtins(registry: FunctionRegistry) -> FunctionRegistry:
    """Register the built-in functions unless a key is already taken."""
    if "identity" not in registry:
        registry.register("identity", {}, identity)
    return registry
