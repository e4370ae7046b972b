"""Persisted notebook and block records.

In memory every optional field is explicit with a default. The persisted
record uses camelCase keys and omits fields at their default, so a block
that was never expanded carries no ``expandSettings`` key at all.
"""

from __future__ import annotations

import uuid
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Flags dropped from the record when False.
_OMIT_WHEN_FALSE = frozenset({"isDeleted", "autoExec", "expandSettings", "expandOutput"})


def generate_notebook_id() -> str:
    """Generate a notebook ID: 'nb_' + 12 hex chars from uuid4."""
    return "nb_" + uuid.uuid4().hex[:12]


def generate_block_id() -> str:
    """Generate a block ID: 'blk_' + 8 hex chars from uuid4."""
    return "blk_" + uuid.uuid4().hex[:8]


class BlockType(IntEnum):
    UNKNOWN = 0
    FUNCTION = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def all(cls) -> list[BlockType]:
        return list(cls)


class BlockMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=generate_block_id)
    type: BlockType = BlockType.UNKNOWN
    function_key: str | None = Field(default=None, alias="functionKey")
    auto_exec: bool = Field(default=False, alias="autoExec")
    expand_settings: bool = Field(default=False, alias="expandSettings")
    expand_output: bool = Field(default=False, alias="expandOutput")

    def to_record(self) -> dict[str, Any]:
        return _strip(self.model_dump(mode="json", by_alias=True, exclude_none=True))


class NotebookMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=generate_notebook_id)
    name: str | None = None
    blocks: list[BlockMeta] = Field(default_factory=list)
    is_deleted: bool = Field(default=False, alias="isDeleted")

    def to_record(self) -> dict[str, Any]:
        """Full snapshot in persisted form."""
        data = _strip(self.model_dump(mode="json", by_alias=True, exclude_none=True))
        data["blocks"] = [_strip(b) for b in data["blocks"]]
        return data

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> NotebookMeta:
        return cls.model_validate(data)


def _strip(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if not (k in _OMIT_WHEN_FALSE and v is False)}
