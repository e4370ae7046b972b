"""Core types used across all modules: errors and the Result container."""

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BlockflowError(Exception):
    """Base class for all blockflow errors."""


class FunctionNotFound(BlockflowError, LookupError):
    """A Function block has no key, or no registration matches it."""

    def __init__(self, key: str | None) -> None:
        self.key = key
        super().__init__(f"Function not found: {key}")


class NotImplementedBlock(BlockflowError, NotImplementedError):
    """The block type has no execution path."""

    def __init__(self, block_type: object) -> None:
        self.block_type = block_type
        super().__init__(f"Run path not implemented for block type {block_type!r}")


class BlockNotFound(BlockflowError, LookupError):
    """A block reference does not belong to the notebook."""

    def __init__(self, block_id: str) -> None:
        self.block_id = block_id
        super().__init__(f"Block {block_id} not found")


class DuplicateBlock(BlockflowError, ValueError):
    """A block with the same id is already in the notebook."""

    def __init__(self, block_id: str) -> None:
        self.block_id = block_id
        super().__init__(f"Block {block_id} already in notebook")


class BlockAttached(BlockflowError, ValueError):
    """The block already belongs to another notebook."""

    def __init__(self, block_id: str, owner_id: str) -> None:
        self.block_id = block_id
        self.owner_id = owner_id
        super().__init__(f"Block {block_id} already belongs to notebook {owner_id}")


class IndexOutOfRange(BlockflowError, IndexError):
    """Reserved for callers that reject out-of-range insert positions.

    Notebook.insert_block appends instead of raising this.
    """


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Diag(BaseModel):
    """A structured diagnostic message."""

    severity: Severity
    code: str
    message: str
    hint: str | None = None


class Result(BaseModel, Generic[T]):  # noqa: UP046 (pydantic needs a Generic[T] subclass)
    """Result container that pairs output with diagnostics.

    Load paths never throw for missing or corrupt records.
    They return Result with diagnostics instead.
    """

    data: T | None = None
    diagnostics: list[Diag] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.has_errors

    def error(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.ERROR, code=code, message=message, hint=hint))

    def warning(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.WARNING, code=code, message=message, hint=hint))
