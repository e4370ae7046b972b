"""Tests for core types: errors, Result[T] and Diag."""

import pytest

from blockflow.core import (
    BlockflowError,
    BlockNotFound,
    Diag,
    DuplicateBlock,
    FunctionNotFound,
    NotImplementedBlock,
    Result,
    Severity,
)


def test_error_hierarchy() -> None:
    assert issubclass(FunctionNotFound, BlockflowError)
    assert issubclass(FunctionNotFound, LookupError)
    assert issubclass(BlockNotFound, LookupError)
    assert issubclass(NotImplementedBlock, NotImplementedError)
    assert issubclass(DuplicateBlock, ValueError)


def test_function_not_found_message() -> None:
    err = FunctionNotFound("blur")
    assert err.key == "blur"
    assert "blur" in str(err)


def test_function_not_found_unset_key() -> None:
    with pytest.raises(LookupError, match="None"):
        raise FunctionNotFound(None)


def test_block_not_found_carries_id() -> None:
    err = BlockNotFound("blk_1")
    assert err.block_id == "blk_1"
    assert str(err) == "Block blk_1 not found"


def test_diag_with_hint() -> None:
    d = Diag(severity=Severity.WARNING, code="CORRUPT", message="bad file", hint="Delete it")
    assert d.hint == "Delete it"


def test_result_empty_is_ok() -> None:
    r: Result[str] = Result()
    assert r.ok is True
    assert r.has_errors is False
    assert r.data is None
    assert r.diagnostics == []


def test_result_error_helper() -> None:
    r: Result[str] = Result(data="hello")
    r.error("NOT_FOUND", "missing")
    assert r.ok is False
    assert r.diagnostics[0].severity == Severity.ERROR
    assert r.diagnostics[0].code == "NOT_FOUND"


def test_result_warning_keeps_ok() -> None:
    r: Result[str] = Result(data="hello")
    r.warning("WARN", "heads up", hint="do something")
    assert r.ok is True
    assert r.diagnostics[0].hint == "do something"
