from __future__ import annotations

import inspect
from collections.abc import Callable

from step_chain.kernel.errors import ConstructionError
from step_chain.kernel.scope import bound_scope, current_scope
from step_chain.ports.scheduler import Scheduler

# done(error=None): completion signal handed to step bodies and to Step.execute callers.
Done = Callable[..., None]
# Normalized step body; the caller binds the execution scope around the call.
Body = Callable[[Done], None]
# Interpreter-level signals pass through; every other raise becomes a step error.
PASSTHROUGH = (KeyboardInterrupt, SystemExit, GeneratorExit)


def wrap_sync(fn: Callable[[], object], scheduler: Scheduler) -> Body:
    # A synchronous step returns or raises; both outcomes are delivered one tick later.
    _require_callable(fn)
    if not _accepts_args(fn, 0):
        raise ConstructionError(f"Synchronous step {fn!r} must be callable without arguments")

    def body(done: Done) -> None:
        try:
            fn()
        except PASSTHROUGH:
            raise
        except BaseException as exc:  # noqa: BLE001 - pytest.fail/skip included
            scheduler.schedule(0, done, exc)
            return
        scheduler.schedule(0, done, None)

    return body


def wrap_async(fn: Callable[[Done], object], scheduler: Scheduler) -> Body:
    # An asynchronous step receives done() and must call it exactly once.
    _require_callable(fn)
    if not _accepts_args(fn, 1):
        raise ConstructionError(f"Asynchronous step {fn!r} must take exactly one argument (the done callback)")

    def body(done: Done) -> None:
        in_call = True
        finished = False
        scope = current_scope()

        def complete(error: object | None = None) -> None:
            nonlocal finished
            if finished:
                raise RuntimeError(f"Step {fn!r} signalled completion more than once")
            finished = True
            if in_call:
                # Completed within the invoking call: keep completion asynchronous.
                scheduler.schedule(0, done, error)
                return
            with bound_scope(scope):
                done(error)

        try:
            fn(complete)
        except PASSTHROUGH:
            raise
        except BaseException as exc:  # noqa: BLE001 - pytest.fail/skip included
            if finished:
                raise
            finished = True
            scheduler.schedule(0, done, exc)
        finally:
            in_call = False

    return body


def _require_callable(fn: object) -> None:
    if not callable(fn):
        raise ConstructionError(f"Expected a function, found: {fn!r}")


def _accepts_args(fn: Callable[..., object], count: int) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature; trust the caller.
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True
