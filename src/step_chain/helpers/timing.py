from __future__ import annotations

from collections.abc import Callable

from step_chain.kernel.adapter import PASSTHROUGH, Done
from step_chain.kernel.errors import ConstructionError, WaitTimeoutError
from step_chain.kernel.extensions import extension
from step_chain.kernel.sequence import Sequence
from step_chain.kernel.step import LeafStep
from step_chain.observability.logging import LogMessage

DEFAULT_TIMEOUT_MESSAGE = "Test function did not return true in the allotted time"


@extension("wait")
def wait(batch: Sequence, millis: int | None = None) -> LeafStep:
    # Pure delay; worst case is the delay itself.
    millis = millis or batch.defaults.timeout
    scheduler = batch.runtime.scheduler

    def sleep(done: Done) -> None:
        scheduler.schedule(millis, done)

    return LeafStep.asynchronous(sleep, scheduler, millis)


@extension("wait_until")
def wait_until(
    batch: Sequence,
    test_fn: Callable[[], object],
    timeout: int | None = None,
    poll_interval: int | None = None,
    timeout_message: str | None = None,
) -> LeafStep:
    """Poll ``test_fn`` until it returns a truthy value.

    Elapsed time is accounted as one ``poll_interval`` per tick rather than
    measured, so a slow predicate stretches the real wait. Every outcome
    (success, timeout, predicate exception) is delivered after an extra
    ``short_wait`` to let the page settle. The declared worst case is
    ``timeout`` regardless of how fast the predicate resolves.
    """
    if not callable(test_fn):
        raise ConstructionError(f"wait_until: Need a test function to execute, found {test_fn!r}")
    timeout = timeout or batch.defaults.timeout
    poll_interval = poll_interval or batch.defaults.poll
    short_wait = batch.defaults.short_wait
    scheduler = batch.runtime.scheduler

    def poll_until(done: Done) -> None:
        elapsed = 0

        def finish(error: object | None = None) -> None:
            timer.cancel()
            scheduler.schedule(short_wait, done, error)

        def poll() -> None:
            nonlocal elapsed
            try:
                satisfied = test_fn()
            except PASSTHROUGH:
                raise
            except BaseException as exc:  # noqa: BLE001 - predicate failure aborts the wait
                finish(exc)
                return
            if satisfied:
                finish()
                return
            elapsed += poll_interval
            if elapsed > timeout:
                finish(WaitTimeoutError(timeout_message or DEFAULT_TIMEOUT_MESSAGE))

        timer = scheduler.schedule(poll_interval, poll, periodic=True)

    return LeafStep.asynchronous(poll_until, scheduler, timeout)


@extension("debug")
def debug(batch: Sequence, message: object) -> Callable[[], None]:
    # Log records need text; an empty message is logged as a quoted empty string.
    text = str(message) or '""'
    log_sink = batch.runtime.log_sink

    def emit() -> None:
        log_sink.emit(LogMessage(level="debug", message=text))

    return emit
