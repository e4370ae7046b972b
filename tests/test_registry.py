"""Tests for the function registry."""

from blockflow.functions import identity, register_builtins
from blockflow.notebook.registry import FunctionRegistry, get_registry, reset_registry


def _first(stream, params):  # type: ignore[no-untyped-def]
    return "first"


def _second(stream, params):  # type: ignore[no-untyped-def]
    return "second"


def test_register_and_lookup() -> None:
    reg = FunctionRegistry()
    spec = reg.register("blur", {"radius": "number"}, _first)
    assert reg.lookup("blur") is spec
    assert spec.inputs == {"radius": "number"}
    assert "blur" in reg
    assert len(reg) == 1


def test_lookup_missing() -> None:
    reg = FunctionRegistry()
    assert reg.lookup("nope") is None
    assert reg.lookup(None) is None


def test_first_registration_shadows_later() -> None:
    reg = FunctionRegistry()
    reg.register("dup", {}, _first)
    reg.register("dup", {}, _second)
    assert len(reg) == 2
    spec = reg.lookup("dup")
    assert spec is not None
    assert spec.transform is _first
    assert reg.keys() == ["dup"]


def test_function_decorator() -> None:
    reg = FunctionRegistry()

    @reg.function("upper", {"text": "string"})
    def upper(stream, params):  # type: ignore[no-untyped-def]
        return stream.upper()

    spec = reg.lookup("upper")
    assert spec is not None
    assert spec.transform is upper
    assert spec.inputs == {"text": "string"}


def test_keys_in_registration_order() -> None:
    reg = FunctionRegistry()
    reg.register("b", {}, _first)
    reg.register("a", {}, _first)
    assert reg.keys() == ["b", "a"]
    assert [s.key for s in reg] == ["b", "a"]


def test_register_builtins_keeps_existing_identity() -> None:
    reg = FunctionRegistry()
    reg.register("identity", {}, _first)
    register_builtins(reg)
    assert len(reg) == 1


def test_builtin_identity() -> None:
    reg = register_builtins(FunctionRegistry())
    spec = reg.lookup("identity")
    assert spec is not None
    assert spec.transform is identity
    assert identity("x", {}) == "x"


def test_default_registry_singleton() -> None:
    reset_registry()
    assert get_registry() is get_registry()
    first = get_registry()
    reset_registry()
    assert get_registry() is not first
    reset_registry()
