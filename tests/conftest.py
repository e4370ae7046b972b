"""Shared test fixtures for blockflow tests."""

from __future__ import annotations

import pytest

from blockflow.flow import DirtyNotifier
from blockflow.notebook.meta import BlockMeta, BlockType, NotebookMeta
from blockflow.notebook.notebook import Notebook
from blockflow.notebook.registry import FunctionRegistry
from blockflow.notebook.store import MemoryStore


def make_meta(name: str | None = None, n_blocks: int = 0) -> NotebookMeta:
    return NotebookMeta(
        name=name,
        blocks=[BlockMeta(id=f"blk_{i}", type=BlockType.FUNCTION, function_key="identity") for i in range(n_blocks)],
    )


@pytest.fixture
def registry() -> FunctionRegistry:
    reg = FunctionRegistry()
    reg.register("identity", {}, lambda stream, params: stream)
    return reg


@pytest.fixture
def notifier() -> DirtyNotifier:
    return DirtyNotifier()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_notebook(registry: FunctionRegistry, notifier: DirtyNotifier, store: MemoryStore):
    def _make(name: str | None = None, n_blocks: int = 0) -> Notebook:
        return Notebook(make_meta(name, n_blocks), registry=registry, notifier=notifier, store=store)

    return _make
