from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from step_chain.kernel.adapter import Body, Done, wrap_async, wrap_sync
from step_chain.kernel.scope import bound_scope
from step_chain.ports.scheduler import Scheduler

DEFAULT_STEP_MS = 10


@runtime_checkable
class Step(Protocol):
    # Unit of asynchronous work with one completion signal and a static worst-case duration.
    def execute(self, scope: object | None, on_done: Done) -> None:
        """Start the work; on_done(error=None) fires exactly once, never synchronously."""
        raise NotImplementedError("Step.execute must be implemented")

    def worst_case_ms(self) -> int:
        """Declared upper bound on running time, used only for timeout budgeting."""
        raise NotImplementedError("Step.worst_case_ms must be implemented")


class LeafStep(Step):
    # Runs one adapted body; the duration is a declared estimate, not a measurement.
    __slots__ = ("_body", "_duration_ms")

    def __init__(self, body: Body, duration_ms: int | None = None) -> None:
        if duration_ms is not None and duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        self._body = body
        self._duration_ms = duration_ms or DEFAULT_STEP_MS

    @classmethod
    def sync(cls, fn: Callable[[], object], scheduler: Scheduler, duration_ms: int | None = None) -> LeafStep:
        return cls(wrap_sync(fn, scheduler), duration_ms)

    @classmethod
    def asynchronous(
        cls,
        fn: Callable[[Done], object],
        scheduler: Scheduler,
        duration_ms: int | None = None,
    ) -> LeafStep:
        return cls(wrap_async(fn, scheduler), duration_ms)

    def execute(self, scope: object | None, on_done: Done) -> None:
        with bound_scope(scope):
            self._body(on_done)

    def worst_case_ms(self) -> int:
        return self._duration_ms

    def __repr__(self) -> str:
        return f"LeafStep(duration_ms={self._duration_ms})"
