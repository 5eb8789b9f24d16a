from __future__ import annotations

from dataclasses import dataclass

from step_chain.kernel.sequence import Sequence
from step_chain.observability.logging import LogMessage
from step_chain.ports.harness import TestContext


def format_failure(error: object) -> str:
    # Innermost error message plus typed expected/actual lines for assertion-style errors.
    # A plain error object may carry its text in a ``message`` attribute.
    message = getattr(error, "message", None)
    if not isinstance(message, str) or not message:
        message = str(error) or type(error).__name__
    if hasattr(error, "expected"):
        expected = getattr(error, "expected")
        message += f"\nExpected: {expected} ({type(expected).__name__})"
    if hasattr(error, "actual"):
        actual = getattr(error, "actual")
        message += f"\nActual: {actual} ({type(actual).__name__})"
    return message


@dataclass(frozen=True, slots=True)
class ScenarioRunner:
    # Binds one batch to one suspendable test; created per run() and then discarded.
    sequence: Sequence
    test: TestContext

    def run(self) -> None:
        test = self.test
        log_sink = self.sequence.runtime.log_sink
        timeout_ms = self.sequence.worst_case_ms()
        resumed = False

        def callback(error: object | None = None) -> None:
            nonlocal resumed
            if resumed:
                log_sink.emit(
                    LogMessage(
                        level="warning",
                        message="Scenario completed more than once; ignoring",
                        fields={"error": None if error is None else repr(error)},
                    )
                )
                return
            resumed = True
            if error is None:
                test.resume(lambda: None)
                return
            message = format_failure(error)
            log_sink.emit(LogMessage(level="error", message="Scenario failed", fields={"error": message}))
            test.resume(lambda: test.fail(message))

        log_sink.emit(
            LogMessage(
                level="info",
                message="Scenario started",
                fields={"steps": len(self.sequence), "timeout_ms": timeout_ms},
            )
        )
        # Execution starts before suspension; the first body may run right here.
        self.sequence.execute(test, callback)
        test.wait(timeout_ms)
