from __future__ import annotations

import contextvars
import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(order=True, slots=True)
class ManualTimer:
    due_ms: int
    seq: int
    callback: Callable[..., object] = field(compare=False)
    args: tuple[object, ...] = field(compare=False, default=())
    interval_ms: int | None = field(compare=False, default=None)
    context: contextvars.Context = field(compare=False, default_factory=contextvars.copy_context)
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler: nothing fires until the clock is advanced.

    Timers due at the same instant fire in scheduling order. Zero-delay timers
    scheduled while advancing fire within the same ``advance`` call, so
    ``run_pending()`` drains every continuation that is already due.
    Like asyncio, each callback runs in a copy of the context that was current
    when it was scheduled.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[ManualTimer] = []
        self._seq = itertools.count()

    def schedule(
        self,
        delay_ms: int,
        callback: Callable[..., object],
        *args: object,
        periodic: bool = False,
    ) -> ManualTimer:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if periodic and delay_ms == 0:
            raise ValueError("periodic timers need a positive delay")
        timer = ManualTimer(
            due_ms=self.now_ms + delay_ms,
            seq=next(self._seq),
            callback=callback,
            args=args,
            interval_ms=delay_ms if periodic else None,
        )
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, delta_ms: int) -> None:
        if delta_ms < 0:
            raise ValueError("delta_ms must be >= 0")
        target = self.now_ms + delta_ms
        while self._queue and self._queue[0].due_ms <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = timer.due_ms
            if timer.interval_ms is not None:
                # Re-arm the same handle so cancel() on it keeps working.
                timer.due_ms += timer.interval_ms
                timer.seq = next(self._seq)
                heapq.heappush(self._queue, timer)
            timer.context.copy().run(timer.callback, *timer.args)
        self.now_ms = target

    def run_pending(self) -> None:
        self.advance(0)

    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)
