from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from step_chain.kernel.errors import ConstructionError, DuplicateExtensionError

if TYPE_CHECKING:
    from step_chain.kernel.sequence import Sequence

# A generator gets the batch being extended plus the call arguments and returns
# a Step or a plain synchronous callable to append.
ExtensionGenerator = Callable[..., object]


class UnknownExtensionError(AttributeError):
    pass


@dataclass
class ExtensionRegistry:
    # Maps fluent method names to step generators.
    _generators: dict[str, ExtensionGenerator] = field(default_factory=dict)

    def register(self, name: str, generator: ExtensionGenerator, *, reserved: Iterable[str] = ()) -> None:
        # Names are registered once; overriding would silently change existing chains.
        if not isinstance(name, str) or not name.isidentifier() or name.startswith("_"):
            raise ConstructionError(f"Extension name must be a public identifier, found: {name!r}")
        if name in self._generators or name in set(reserved):
            raise DuplicateExtensionError(f"Attempt to extend the batch with an existing method: {name}")
        if not callable(generator):
            raise ConstructionError(f"Generator for name [{name}] must be a function")
        self._generators[name] = generator

    def unregister(self, name: str) -> None:
        self._generators.pop(name, None)

    def get(self, name: str) -> ExtensionGenerator:
        if name not in self._generators:
            raise UnknownExtensionError(name)
        return self._generators[name]

    def names(self) -> list[str]:
        return sorted(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators


# Process-wide registry consulted by Sequence attribute lookup.
EXTENSIONS = ExtensionRegistry()


def extension(name: str) -> Callable[[ExtensionGenerator], ExtensionGenerator]:
    # Decorator form of Sequence.extend.
    def _decorate(generator: ExtensionGenerator) -> ExtensionGenerator:
        from step_chain.kernel.sequence import Sequence

        Sequence.extend(name, generator)
        return generator

    return _decorate


def bind_extension(sequence: Sequence, generator: ExtensionGenerator) -> Callable[..., Sequence]:
    def fluent(*args: object, **kwargs: object) -> Sequence:
        return sequence.add(generator(sequence, *args, **kwargs))

    fluent.__name__ = getattr(generator, "__name__", "extension")
    fluent.__doc__ = getattr(generator, "__doc__", None)
    return fluent
