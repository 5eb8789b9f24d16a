from __future__ import annotations

from dataclasses import dataclass, field


class SimulationError(RuntimeError):
    pass


@dataclass(slots=True)
class MemoryElement:
    # Minimal element model: computed display/visibility, value and received events.
    tag: str = "div"
    display: str = "block"
    visibility: str = "visible"
    value: object = None
    focusable: bool = True
    simulatable: bool = True
    events: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def event_names(self) -> list[str]:
        return [name for name, _ in self.events]


class MemoryDocument:
    # In-memory Document adapter keyed by exact selector string.
    def __init__(self, elements: dict[str, MemoryElement] | None = None) -> None:
        self._elements: dict[str, MemoryElement] = dict(elements or {})
        self.queries: list[str] = []

    def put(self, selector: str, element: MemoryElement | None = None) -> MemoryElement:
        element = element or MemoryElement()
        self._elements[selector] = element
        return element

    def remove(self, selector: str) -> None:
        self._elements.pop(selector, None)

    def query(self, selector: str) -> MemoryElement | None:
        self.queries.append(selector)
        return self._elements.get(selector)

    def is_visible(self, element: object) -> bool:
        if not isinstance(element, MemoryElement):
            return False
        return element.display != "none" and element.visibility != "hidden"

    def simulate(self, element: object, event: str, **options: object) -> None:
        if not isinstance(element, MemoryElement):
            raise SimulationError(f"Cannot simulate {event} on {element!r}")
        if not element.simulatable:
            raise SimulationError(f"Event simulation not supported for <{element.tag}>")
        if event == "focus" and not element.focusable:
            raise SimulationError(f"<{element.tag}> is not focusable")
        element.events.append((event, dict(options)))

    def set_value(self, element: object, value: object) -> None:
        if not isinstance(element, MemoryElement):
            raise SimulationError(f"Cannot set value on {element!r}")
        element.value = value
