from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from step_chain.kernel.errors import ConstructionError, ElementNotFoundError
from step_chain.kernel.extensions import extension
from step_chain.kernel.sequence import Sequence
from step_chain.observability.logging import LogMessage
from step_chain.ports.document import Document
from step_chain.ports.log_sink import LogSink

# Key code for the space bar, used to fire key listeners after a value change.
_SPACE = 32


@contextmanager
def best_effort(log_sink: LogSink, action: str) -> Iterator[None]:
    """Run a block whose failures are discarded by contract.

    Event simulation is not supported uniformly across element types (focus on
    a non-focusable node, key events on a select, ...). Those failures must not
    fail the scenario; they are only logged at debug level.
    """
    try:
        yield
    except Exception as exc:  # noqa: BLE001 - discarded by contract
        log_sink.emit(
            LogMessage(
                level="debug",
                message=f"Best-effort {action} failed",
                fields={"error": repr(exc)},
            )
        )


def _document(batch: Sequence, helper: str) -> Document:
    document = batch.runtime.document
    if document is None:
        raise ConstructionError(f"{helper} needs a document; configure StepRuntime(document=...)")
    return document


def _locate(document: Document, selector: str) -> object:
    element = document.query(selector)
    if element is None:
        raise ElementNotFoundError(selector)
    return element


@extension("wait_for_element")
def wait_for_element(
    batch: Sequence,
    selector: str,
    timeout: int | None = None,
    poll_interval: int | None = None,
) -> Sequence:
    document = _document(batch, "wait_for_element")

    def present() -> bool:
        element = document.query(selector)
        return element is not None and document.is_visible(element)

    return batch.create_nested().wait_until(
        present,
        timeout,
        poll_interval,
        f"Could not find node [{selector}] in the allotted time",
    )


@extension("click")
def click(batch: Sequence, selector: str) -> Sequence:
    document = _document(batch, "click")
    log_sink = batch.runtime.log_sink

    def press() -> None:
        element = _locate(document, selector)
        with best_effort(log_sink, f"click on {selector}"):
            document.simulate(element, "mousedown")
            document.simulate(element, "mouseup")
            document.simulate(element, "click")

    return batch.create_nested().add(press).wait(batch.defaults.short_wait)


@extension("set_value")
def set_value(batch: Sequence, selector: str, value: object) -> Sequence:
    document = _document(batch, "set_value")
    log_sink = batch.runtime.log_sink

    def type_in() -> None:
        element = _locate(document, selector)
        with best_effort(log_sink, f"focus on {selector}"):
            document.simulate(element, "focus")
        document.set_value(element, value)
        with best_effort(log_sink, f"key events on {selector}"):
            document.simulate(element, "keydown", key_code=_SPACE)
            document.simulate(element, "keyup", key_code=_SPACE)
            document.simulate(element, "keypress", char_code=_SPACE)

    return batch.create_nested().add(type_in).wait(batch.defaults.short_wait)


@extension("wait_and_click")
def wait_and_click(batch: Sequence, selector: str, timeout: int | None = None) -> Sequence:
    return batch.create_nested().wait_for_element(selector, timeout).click(selector)
