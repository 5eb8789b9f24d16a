from __future__ import annotations

import asyncio
from collections.abc import Callable


class _PeriodicHandle:
    # Re-arms itself after every tick until cancelled.
    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay_s: float,
        callback: Callable[..., object],
        args: tuple[object, ...],
    ) -> None:
        self._loop = loop
        self._delay_s = delay_s
        self._callback = callback
        self._args = args
        self._cancelled = False
        self._handle = loop.call_later(delay_s, self._tick)

    def _tick(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._delay_s, self._tick)
        self._callback(*self._args)

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class AsyncioScheduler:
    # Scheduler over an asyncio event loop; delays are milliseconds.
    # Without an explicit loop the first schedule() must happen inside a running loop.
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                raise RuntimeError(
                    "AsyncioScheduler has no loop: pass loop= or execute steps from a running event loop "
                    "(FunctionalTestCase provides one)"
                ) from None
        return self._loop

    def schedule(
        self,
        delay_ms: int,
        callback: Callable[..., object],
        *args: object,
        periodic: bool = False,
    ) -> asyncio.TimerHandle | _PeriodicHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        delay_s = delay_ms / 1000.0
        if periodic:
            if delay_ms == 0:
                raise ValueError("periodic timers need a positive delay")
            return _PeriodicHandle(self.loop, delay_s, callback, args)
        return self.loop.call_later(delay_s, callback, *args)
