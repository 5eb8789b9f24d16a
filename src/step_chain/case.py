from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

from step_chain.adapters.asyncio_scheduler import AsyncioScheduler
from step_chain.config.loader import load_batch_defaults
from step_chain.config.models import BatchDefaults
from step_chain.kernel.runner import ScenarioRunner
from step_chain.kernel.runtime import StepRuntime
from step_chain.kernel.sequence import Sequence
from step_chain.observability.logging import StdoutLogSink
from step_chain.ports.document import Document
from step_chain.ports.log_sink import LogSink


class TestBatch(Sequence):
    # Top-level batch bound to one test; run() drives it to completion.
    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        test: FunctionalTestCase,
        defaults: BatchDefaults | None = None,
        *,
        runtime: StepRuntime | None = None,
        **overrides: int | None,
    ) -> None:
        super().__init__(defaults, runtime=runtime, **overrides)
        self.test = test

    def run(self) -> None:
        ScenarioRunner(sequence=self, test=self.test).run()


class FunctionalTestCase:
    """Suspendable test context running batches on a private asyncio loop.

    Usage from any test function::

        with FunctionalTestCase(document=page) as case:
            case.batch().wait_and_click("#open").wait_for_element("#dialog").run()

    ``wait`` blocks the calling test until the batch resumes it or the timeout
    elapses; failures reported through ``fail`` surface as ``AssertionError``
    in the test's own stack.
    """

    def __init__(
        self,
        *,
        document: Document | None = None,
        log_sink: LogSink | None = None,
        defaults: BatchDefaults | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._owns_loop = loop is None
        self.loop = loop or asyncio.new_event_loop()
        self.defaults = defaults or BatchDefaults()
        self.runtime = StepRuntime(
            scheduler=AsyncioScheduler(self.loop),
            document=document,
            log_sink=log_sink or StdoutLogSink(),
        )
        self._resumed: asyncio.Future[Callable[[], None]] | None = None

    @classmethod
    def from_config(cls, path: Path, **kwargs: Any) -> FunctionalTestCase:
        return cls(defaults=load_batch_defaults(path), **kwargs)

    def batch(self, **overrides: int | None) -> TestBatch:
        return TestBatch(self, self.defaults, runtime=self.runtime, **overrides)

    def wait(self, timeout_ms: int) -> None:
        resumed = self._pending()
        try:
            after = self.loop.run_until_complete(asyncio.wait_for(asyncio.shield(resumed), timeout_ms / 1000.0))
        except TimeoutError:
            raise AssertionError(f"Timeout: wait() called but resume() never called ({timeout_ms} ms)") from None
        finally:
            self._resumed = None
        after()

    def resume(self, after: Callable[[], None]) -> None:
        resumed = self._pending()
        if resumed.done():
            raise RuntimeError("resume() called more than once for the same wait()")
        resumed.set_result(after)

    def fail(self, message: str) -> None:
        raise AssertionError(message)

    def close(self) -> None:
        if self._owns_loop and not self.loop.is_closed():
            self.loop.close()

    def __enter__(self) -> FunctionalTestCase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _pending(self) -> asyncio.Future[Callable[[], None]]:
        # Created lazily so resume() may legitimately precede wait().
        if self._resumed is None:
            self._resumed = self.loop.create_future()
        return self._resumed
