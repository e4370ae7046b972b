"""Notebook: an ordered block pipeline kept in lockstep with its metadata."""

from __future__ import annotations

import logging
from typing import Protocol

from blockflow.core import BlockAttached, BlockNotFound, DuplicateBlock
from blockflow.flow import DirtyNotifier
from blockflow.notebook.block import Block
from blockflow.notebook.meta import BlockMeta, NotebookMeta
from blockflow.notebook.registry import FunctionRegistry
from blockflow.notebook.stream import EMPTY_STREAM, Stream

logger = logging.getLogger("blockflow.notebook")


class PersistenceStore(Protocol):
    def save_notebook(self, notebook: Notebook) -> None: ...


class Notebook:
    """Owns the block sequence and the dirty/persistence policy.

    ``_blocks`` and ``meta.blocks`` always have the same length and order;
    every structural change updates both before signalling dirty.

    A notebook is permanent when it has a non-empty name. Every change
    signals the notifier, but only permanent notebooks are written to the
    store.
    """

    def __init__(
        self,
        meta: NotebookMeta,
        *,
        registry: FunctionRegistry,
        notifier: DirtyNotifier,
        store: PersistenceStore | None = None,
    ) -> None:
        self.meta = meta
        self._registry = registry
        self._notifier = notifier
        self._store = store
        self._blocks: list[Block] = []
        for block_meta in meta.blocks:
            if any(existing.id == block_meta.id for existing in self._blocks):
                raise DuplicateBlock(block_meta.id)
            block = self._wrap(block_meta)
            block.owner_id = self.id
            self._blocks.append(block)
        self._permanent = bool(meta.name)

    @classmethod
    def create(
        cls,
        name: str | None = None,
        *,
        registry: FunctionRegistry,
        notifier: DirtyNotifier,
        store: PersistenceStore | None = None,
    ) -> Notebook:
        """Build a notebook from a fresh record. Nothing is signalled or saved."""
        meta = NotebookMeta(name=name or None)
        return cls(meta, registry=registry, notifier=notifier, store=store)

    def __repr__(self) -> str:
        return f"Notebook(id={self.id!r}, name={self.name!r}, blocks={len(self._blocks)})"

    def _wrap(self, meta: BlockMeta) -> Block:
        return Block(meta, registry=self._registry, notifier=self._notifier, on_change=self.flag_dirty)

    def flag_dirty(self) -> None:
        self._notifier.dirty()
        if not self._permanent or self._store is None:
            return
        self._store.save_notebook(self)

    @property
    def id(self) -> str:
        return self.meta.id

    @property
    def permanent(self) -> bool:
        return self._permanent

    @property
    def name(self) -> str:
        return self.meta.name or ""

    @name.setter
    def name(self, value: str) -> None:
        self.meta.name = value or None
        self._permanent = bool(self.meta.name)
        self.flag_dirty()

    @property
    def is_deleted(self) -> bool:
        return self.meta.is_deleted

    @is_deleted.setter
    def is_deleted(self, value: bool) -> None:
        if self.meta.is_deleted == value:
            return
        self.meta.is_deleted = value
        self.flag_dirty()

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def create_block(self, index: int | None = None) -> Block:
        block = self._wrap(BlockMeta())
        return self.insert_block(block, index)

    def insert_block(self, block: Block, index: int | None = None) -> Block:
        """Insert ``block`` at ``index``.

        Only ``0 <= index < len(self)`` inserts in place. A missing, negative
        or too-large index appends at the end instead of raising.
        """
        if any(existing.id == block.id for existing in self._blocks):
            raise DuplicateBlock(block.id)
        if block.owner_id is not None:
            raise BlockAttached(block.id, block.owner_id)
        if index is not None and 0 <= index < len(self._blocks):
            self._blocks.insert(index, block)
            self.meta.blocks.insert(index, block.meta)
        else:
            self._blocks.append(block)
            self.meta.blocks.append(block.meta)
        block.on_change = self.flag_dirty
        block.owner_id = self.id
        logger.debug("Inserted block %s into notebook %s at %d", block.id, self.id, self.index_of(block))
        self.flag_dirty()
        return block

    def delete_block(self, block: Block) -> None:
        idx = self.index_of(block)
        del self._blocks[idx]
        del self.meta.blocks[idx]
        block.on_change = self._notifier.dirty
        block.owner_id = None
        logger.debug("Deleted block %s from notebook %s", block.id, self.id)
        self.flag_dirty()

    def index_of(self, block: Block) -> int:
        """Position of ``block`` by identity."""
        for i, existing in enumerate(self._blocks):
            if existing is block:
                return i
        raise BlockNotFound(block.id)

    def get_block(self, block_id: str) -> Block:
        for block in self._blocks:
            if block.id == block_id:
                return block
        raise BlockNotFound(block_id)

    def get_input_stream_at(self, block: Block) -> Stream:
        """Nearest output above ``block``, skipping blocks that have none."""
        for upstream in reversed(self._blocks[: self.index_of(block)]):
            if upstream.output is not None:
                return upstream.output
        return EMPTY_STREAM

    async def run_block(self, block: Block) -> Stream:
        self.index_of(block)
        return await block.run(self)
