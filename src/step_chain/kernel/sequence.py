from __future__ import annotations

from collections.abc import Callable, Iterator

from step_chain.config.models import BatchDefaults
from step_chain.kernel.adapter import Done
from step_chain.kernel.extensions import EXTENSIONS, ExtensionGenerator, ExtensionRegistry, bind_extension
from step_chain.kernel.runtime import StepRuntime
from step_chain.kernel.step import LeafStep, Step
from step_chain.observability.logging import LogMessage


class Sequence(Step):
    """Ordered batch of steps run strictly one after another, fail-fast.

    Fluent calls append a child and return the batch, so a whole scenario reads
    as one chain::

        batch.wait_for_element("#login").set_value("#user", "ann").click("#submit")

    Besides ``add``/``add_async`` every name registered through ``extend`` is
    available as a fluent method. Configuration is copied into nested batches
    created with ``create_nested``; there is no live link back to the parent.
    """

    extensions: ExtensionRegistry = EXTENSIONS

    def __init__(
        self,
        defaults: BatchDefaults | None = None,
        *,
        runtime: StepRuntime | None = None,
        **overrides: int | None,
    ) -> None:
        self.defaults = (defaults or BatchDefaults()).merged(overrides)
        self.runtime = runtime or StepRuntime()
        self._steps: list[Step] = []

    @classmethod
    def extend(cls, name: str, generator: ExtensionGenerator) -> None:
        # Own attributes are reserved so an extension can never shadow the core API.
        cls.extensions.register(name, generator, reserved=dir(cls))

    def __getattr__(self, name: str) -> Callable[..., Sequence]:
        # Only reached when normal lookup fails: resolve registered fluent extensions.
        if name.startswith("_"):
            raise AttributeError(name)
        generator = type(self).extensions.get(name)
        return bind_extension(self, generator)

    def add(self, step: Step | Callable[[], object], duration_ms: int | None = None) -> Sequence:
        # Steps keep their own duration; plain callables become synchronous leaf steps.
        if isinstance(step, Step):
            self._steps.append(step)
        else:
            self._steps.append(LeafStep.sync(step, self.runtime.scheduler, duration_ms))
        return self

    def add_async(self, fn: Callable[[Done], object], duration_ms: int | None = None) -> Sequence:
        self._steps.append(LeafStep.asynchronous(fn, self.runtime.scheduler, duration_ms))
        return self

    def execute(self, scope: object | None, on_done: Done) -> None:
        steps = self._steps
        scope = self if scope is None else scope
        log_sink = self.runtime.log_sink

        def run_from(index: int) -> None:
            if index >= len(steps):
                on_done(None)
                return
            step = steps[index]
            completed = False

            def child_done(error: object | None = None) -> None:
                # Each child advances the cursor at most once.
                nonlocal completed
                if completed:
                    log_sink.emit(
                        LogMessage(
                            level="warning",
                            message="Step completed more than once; ignoring",
                            fields={"step": repr(step), "index": index},
                        )
                    )
                    return
                completed = True
                if error is not None:
                    on_done(error)
                    return
                run_from(index + 1)

            step.execute(scope, child_done)

        run_from(0)

    def worst_case_ms(self) -> int:
        # Recomputed every call so it tracks children added later.
        return sum(step.worst_case_ms() for step in self._steps)

    def create_nested(self, **overrides: int | None) -> Sequence:
        # Not linked as a child: callers add() it explicitly when nesting is wanted.
        return Sequence(self.defaults.merged(overrides), runtime=self.runtime)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(tuple(self._steps))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(steps={len(self._steps)}, worst_case_ms={self.worst_case_ms()})"
