from __future__ import annotations

from typing import Protocol, runtime_checkable


# Document wraps the element query / event simulation facility of the page under test.
@runtime_checkable
class Document(Protocol):
    def query(self, selector: str) -> object | None:
        """Return the first element matching selector, or None."""
        raise NotImplementedError("Document is a port; use a concrete adapter.")

    def is_visible(self, element: object) -> bool:
        """Return True when the element is displayed and not hidden."""
        raise NotImplementedError("Document is a port; use a concrete adapter.")

    def simulate(self, element: object, event: str, **options: object) -> None:
        """Dispatch a simulated DOM event (mousedown, click, focus, keydown, ...)."""
        raise NotImplementedError("Document is a port; use a concrete adapter.")

    def set_value(self, element: object, value: object) -> None:
        """Assign the element's value property."""
        raise NotImplementedError("Document is a port; use a concrete adapter.")
