from __future__ import annotations

import pytest

from step_chain.adapters.manual_scheduler import ManualScheduler
from step_chain.kernel.errors import ConstructionError, DuplicateExtensionError
from step_chain.kernel.extensions import EXTENSIONS, ExtensionRegistry, UnknownExtensionError, extension
from step_chain.kernel.runtime import StepRuntime
from step_chain.kernel.sequence import Sequence
from step_chain.observability.logging import MemoryLogSink


@pytest.fixture
def seq() -> Sequence:
    return Sequence(runtime=StepRuntime(scheduler=ManualScheduler(), log_sink=MemoryLogSink()))


def test_registered_extension_is_fluent(seq: Sequence) -> None:
    # Generators receive the batch plus call arguments; their result is appended.
    calls: list[tuple[object, ...]] = []

    def remember(batch: Sequence, value: int, *, label: str = "") -> object:
        calls.append((batch, value, label))
        return lambda: None

    Sequence.extend("remember_value", remember)
    try:
        returned = seq.remember_value(3, label="x")
        assert returned is seq
        assert calls == [(seq, 3, "x")]
        assert len(seq) == 1
    finally:
        EXTENSIONS.unregister("remember_value")


def test_extension_may_return_a_step(seq: Sequence) -> None:
    def nested(batch: Sequence) -> Sequence:
        return batch.create_nested().add(lambda: None, 60)

    Sequence.extend("sixty", nested)
    try:
        assert seq.sixty().sixty().worst_case_ms() == 120
    finally:
        EXTENSIONS.unregister("sixty")


def test_duplicate_extension_name_fails_at_registration() -> None:
    Sequence.extend("only_once", lambda batch: (lambda: None))
    try:
        with pytest.raises(DuplicateExtensionError):
            Sequence.extend("only_once", lambda batch: (lambda: None))
    finally:
        EXTENSIONS.unregister("only_once")


def test_builtin_and_core_names_are_reserved() -> None:
    # Built-in helpers and core methods cannot be replaced.
    for name in ("wait", "click", "add", "execute", "create_nested"):
        with pytest.raises(DuplicateExtensionError):
            Sequence.extend(name, lambda batch: (lambda: None))


def test_non_callable_generator_fails() -> None:
    with pytest.raises(ConstructionError):
        Sequence.extend("not_callable", "nope")  # type: ignore[arg-type]
    assert "not_callable" not in EXTENSIONS


def test_invalid_extension_name_fails() -> None:
    registry = ExtensionRegistry()
    for name in ("", "_private", "has space"):
        with pytest.raises(ConstructionError):
            registry.register(name, lambda batch: None)


def test_unknown_extension_is_attribute_error(seq: Sequence) -> None:
    with pytest.raises(UnknownExtensionError):
        seq.no_such_helper()
    assert not hasattr(seq, "no_such_helper")


def test_extension_decorator_registers() -> None:
    @extension("decorated_step")
    def decorated(batch: Sequence) -> object:
        return lambda: None

    try:
        assert "decorated_step" in EXTENSIONS
        assert EXTENSIONS.get("decorated_step") is decorated
    finally:
        EXTENSIONS.unregister("decorated_step")


def test_builtin_helpers_are_registered() -> None:
    assert {"wait", "wait_until", "debug", "wait_for_element", "click", "set_value", "wait_and_click"} <= set(
        EXTENSIONS.names()
    )
