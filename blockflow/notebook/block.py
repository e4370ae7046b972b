"""A single pipeline stage.

A Block wraps its persisted BlockMeta and an in-memory output. It holds no
reference to its notebook: property changes are reported through the
``on_change`` callback and ``run`` receives the upstream lookup explicitly.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Protocol

from blockflow.core import FunctionNotFound, NotImplementedBlock
from blockflow.flow import DirtyNotifier
from blockflow.notebook.meta import BlockMeta, BlockType
from blockflow.notebook.registry import FunctionRegistry
from blockflow.notebook.stream import Stream

logger = logging.getLogger("blockflow.notebook")


class UpstreamLookup(Protocol):
    def get_input_stream_at(self, block: Block) -> Stream: ...


class Block:
    def __init__(
        self,
        meta: BlockMeta,
        *,
        registry: FunctionRegistry,
        notifier: DirtyNotifier,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.meta = meta
        self._registry = registry
        self._notifier = notifier
        self.on_change = on_change or notifier.dirty
        # Id of the notebook holding this block, None while detached.
        self.owner_id: str | None = None
        self._output: Stream | None = None
        self._type_changes = 0

    def __repr__(self) -> str:
        return f"Block(id={self.id!r}, type={self.type.label})"

    def flag_dirty(self) -> None:
        self.on_change()

    @property
    def id(self) -> str:
        return self.meta.id

    @property
    def type(self) -> BlockType:
        return self.meta.type

    @type.setter
    def type(self, value: BlockType) -> None:
        if self.meta.type == value:
            return
        self.meta.type = value
        # A new type never runs with the previous type's key or output.
        self.meta.function_key = None
        self._output = None
        self._type_changes += 1
        self.flag_dirty()

    @property
    def function_key(self) -> str | None:
        return self.meta.function_key

    @function_key.setter
    def function_key(self, value: str | None) -> None:
        value = value or None
        if self.meta.function_key == value:
            return
        self.meta.function_key = value
        self.flag_dirty()

    @property
    def auto_exec(self) -> bool:
        return self.meta.auto_exec

    @auto_exec.setter
    def auto_exec(self, value: bool) -> None:
        if self.meta.auto_exec == value:
            return
        self.meta.auto_exec = value
        self.flag_dirty()

    @property
    def expand_settings(self) -> bool:
        return self.meta.expand_settings

    @expand_settings.setter
    def expand_settings(self, value: bool) -> None:
        if self.meta.expand_settings == value:
            return
        self.meta.expand_settings = value
        self.flag_dirty()

    @property
    def expand_output(self) -> bool:
        return self.meta.expand_output

    @expand_output.setter
    def expand_output(self, value: bool) -> None:
        if self.meta.expand_output == value:
            return
        self.meta.expand_output = value
        self.flag_dirty()

    @property
    def output(self) -> Stream | None:
        return self._output

    async def run(self, upstream: UpstreamLookup) -> Stream:
        """Run this block on the nearest upstream output and cache the result.

        The output is only replaced once the transformation has resolved, so a
        failure leaves the previous output in place. Concurrent runs of the
        same block race; the last one to resolve wins. A result computed for a
        type the block no longer has is returned but not cached.
        """
        type_changes = self._type_changes
        stream = upstream.get_input_stream_at(self)
        output = await self.run_single_code(stream)
        if type_changes != self._type_changes:
            logger.info("Dropped stale output of block %s after a type change", self.id)
            return output
        self._output = output
        logger.info("Ran block %s (%s)", self.id, self.type.label)
        self._notifier.dirty()
        return output

    async def run_single_code(self, stream: Stream) -> Stream:
        if self.type == BlockType.FUNCTION:
            spec = self._registry.lookup(self.function_key)
            if spec is None:
                raise FunctionNotFound(self.function_key)
            result = spec.transform(stream, {})
            if inspect.isawaitable(result):
                result = await result
            return result
        raise NotImplementedBlock(self.type)
