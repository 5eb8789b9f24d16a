from __future__ import annotations

import pytest

from step_chain.adapters.manual_scheduler import ManualScheduler
from step_chain.helpers.timing import DEFAULT_TIMEOUT_MESSAGE
from step_chain.kernel.errors import ConstructionError, WaitTimeoutError
from step_chain.kernel.runtime import StepRuntime
from step_chain.kernel.sequence import Sequence
from step_chain.observability.logging import MemoryLogSink


def _setup(**overrides: int) -> tuple[Sequence, ManualScheduler, MemoryLogSink]:
    scheduler = ManualScheduler()
    log_sink = MemoryLogSink()
    return Sequence(runtime=StepRuntime(scheduler=scheduler, log_sink=log_sink), **overrides), scheduler, log_sink


class _Predicate:
    # Returns False for the first `falses` calls, True afterwards.
    def __init__(self, falses: int) -> None:
        self.falses = falses
        self.calls: list[int] = []

    def __call__(self) -> bool:
        self.calls.append(len(self.calls) + 1)
        return len(self.calls) > self.falses


def test_wait_delays_by_explicit_millis() -> None:
    seq, scheduler, _ = _setup()
    errors: list[object | None] = []
    seq.wait(250).execute(None, errors.append)
    scheduler.advance(249)
    assert errors == []
    scheduler.advance(1)
    assert errors == [None]
    assert seq.worst_case_ms() == 250


def test_wait_defaults_to_timeout() -> None:
    seq, _, _ = _setup(timeout=1234)
    assert seq.wait().worst_case_ms() == 1234


def test_wait_until_succeeds_on_fifth_poll() -> None:
    # False for four polls, true on the fifth: success after the fifth tick plus short_wait.
    seq, scheduler, _ = _setup()
    predicate = _Predicate(falses=4)
    errors: list[object | None] = []
    seq.wait_until(predicate, 1000, 200).execute(None, errors.append)

    scheduler.advance(999)
    assert predicate.calls == [1, 2, 3, 4]
    assert errors == []

    scheduler.advance(1)
    assert len(predicate.calls) == 5
    assert errors == []

    scheduler.advance(99)
    assert errors == []
    scheduler.advance(1)
    assert errors == [None]
    assert scheduler.now_ms == 1100


def test_wait_until_timeout_uses_custom_message() -> None:
    seq, scheduler, _ = _setup()
    errors: list[object | None] = []
    seq.wait_until(lambda: False, 300, 200, "custom msg").execute(None, errors.append)
    scheduler.advance(10_000)
    assert len(errors) == 1
    assert isinstance(errors[0], WaitTimeoutError)
    assert str(errors[0]) == "custom msg"


def test_wait_until_timeout_default_message_and_timing() -> None:
    # Two polls at 200ms: 400 > 300 fails at the second tick, reported after short_wait.
    seq, scheduler, _ = _setup()
    predicate = _Predicate(falses=100)
    errors: list[object | None] = []
    seq.wait_until(predicate, 300, 200).execute(None, errors.append)
    scheduler.advance(499)
    assert errors == []
    scheduler.advance(1)
    assert str(errors[0]) == DEFAULT_TIMEOUT_MESSAGE
    assert predicate.calls == [1, 2]
    scheduler.advance(5000)
    assert predicate.calls == [1, 2]


def test_wait_until_predicate_exception_aborts() -> None:
    seq, scheduler, _ = _setup()
    errors: list[object | None] = []
    boom = RuntimeError("predicate broke")

    def predicate() -> bool:
        raise boom

    seq.wait_until(predicate, 5000, 100).execute(None, errors.append)
    scheduler.advance(200)
    assert errors == [boom]
    assert scheduler.pending() == 0


def test_wait_until_uses_config_defaults() -> None:
    seq, scheduler, _ = _setup(timeout=600, poll=300, short_wait=10)
    predicate = _Predicate(falses=1)
    errors: list[object | None] = []
    step = seq.wait_until(predicate)
    assert step.worst_case_ms() == 600
    step.execute(None, errors.append)
    scheduler.advance(610)
    assert errors == [None]
    assert predicate.calls == [1, 2]


def test_wait_until_declares_timeout_as_duration() -> None:
    seq, _, _ = _setup()
    assert seq.wait_until(lambda: True, 4321, 50).worst_case_ms() == 4321


def test_wait_until_rejects_non_callable() -> None:
    seq, _, _ = _setup()
    with pytest.raises(ConstructionError):
        seq.wait_until("#selector")
    assert len(seq) == 0


def test_wait_until_can_run_twice() -> None:
    # Poll accounting is per execution, not shared between runs of the same step.
    seq, scheduler, _ = _setup()
    errors: list[object | None] = []
    seq.wait_until(lambda: False, 300, 200, "late")
    seq.execute(None, errors.append)
    scheduler.advance(1000)
    seq.execute(None, errors.append)
    scheduler.advance(499)
    assert len(errors) == 1
    scheduler.advance(1)
    assert [str(e) for e in errors] == ["late", "late"]


def test_debug_emits_diagnostic() -> None:
    seq, scheduler, log_sink = _setup()
    errors: list[object | None] = []
    seq.debug("checkpoint reached").execute(None, errors.append)
    assert seq.worst_case_ms() == 10
    scheduler.run_pending()
    assert errors == [None]
    assert [(m.level, m.message) for m in log_sink.messages] == [("debug", "checkpoint reached")]


def test_debug_logs_empty_message() -> None:
    seq, scheduler, log_sink = _setup()
    errors: list[object | None] = []
    seq.debug("").execute(None, errors.append)
    scheduler.run_pending()
    assert errors == [None]
    assert [(m.level, m.message) for m in log_sink.messages] == [("debug", '""')]
