from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class Timer(Protocol):
    def cancel(self) -> None:
        """Stop the timer; a cancelled timer never fires again."""
        raise NotImplementedError("Timer is a port; use a concrete adapter.")


# Scheduler is the only source of asynchrony for steps (single-threaded, cooperative).
@runtime_checkable
class Scheduler(Protocol):
    def schedule(
        self,
        delay_ms: int,
        callback: Callable[..., object],
        *args: object,
        periodic: bool = False,
    ) -> Timer:
        """Run callback(*args) after delay_ms; when periodic, repeat every delay_ms until cancelled."""
        raise NotImplementedError("Scheduler is a port; use a concrete adapter.")
