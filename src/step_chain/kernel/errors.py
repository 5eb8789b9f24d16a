from __future__ import annotations

_MISSING = object()


class ConstructionError(TypeError):
    # Raised synchronously while a chain is being built; never delivered through a callback.
    pass


class DuplicateExtensionError(ConstructionError):
    pass


class StepError(Exception):
    # Execution failure delivered through on_done.
    # expected/actual are only set when supplied so failure reports can tell them apart from None.
    def __init__(self, message: str, *, expected: object = _MISSING, actual: object = _MISSING) -> None:
        super().__init__(message)
        self.message = message
        if expected is not _MISSING:
            self.expected = expected
        if actual is not _MISSING:
            self.actual = actual


class WaitTimeoutError(StepError):
    # wait_until exhausted its polling budget.
    pass


class ElementNotFoundError(StepError):
    def __init__(self, selector: str) -> None:
        super().__init__(f"Unable to find node with selector: {selector}")
        self.selector = selector
