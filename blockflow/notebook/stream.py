"""Opaque stream values passed between blocks.

Blocks never look inside a stream; they only check whether a block has
produced one yet.
"""

from __future__ import annotations

from typing import Any, Final

Stream = Any


class EmptyStream:
    """Input handed to a block that has no upstream output."""

    _instance: EmptyStream | None = None

    def __new__(cls) -> EmptyStream:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY_STREAM"


EMPTY_STREAM: Final = EmptyStream()
