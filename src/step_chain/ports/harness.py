from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


# TestContext is the outer test framework's suspend/resume surface.
@runtime_checkable
class TestContext(Protocol):
    def wait(self, timeout_ms: int) -> None:
        """Suspend the test until resume() is called or timeout_ms elapses."""
        raise NotImplementedError("TestContext is a port; use a concrete adapter.")

    def resume(self, after: Callable[[], None]) -> None:
        """Resume a suspended test and run `after` in the test's own context."""
        raise NotImplementedError("TestContext is a port; use a concrete adapter.")

    def fail(self, message: str) -> None:
        """Report an assertion failure for the current test."""
        raise NotImplementedError("TestContext is a port; use a concrete adapter.")
