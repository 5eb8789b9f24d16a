from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Execution scope of the step body currently running; plays the role of an implicit receiver.
_current_scope: ContextVar[object | None] = ContextVar("step_chain_scope", default=None)


def current_scope() -> object | None:
    return _current_scope.get()


@contextmanager
def bound_scope(scope: object | None) -> Iterator[None]:
    # Callbacks scheduled inside the block copy the context and keep seeing the scope.
    token = _current_scope.set(scope)
    try:
        yield
    finally:
        _current_scope.reset(token)
