from __future__ import annotations

from dataclasses import dataclass, field

from step_chain.adapters.asyncio_scheduler import AsyncioScheduler
from step_chain.observability.logging import StdoutLogSink
from step_chain.ports.document import Document
from step_chain.ports.log_sink import LogSink
from step_chain.ports.scheduler import Scheduler


@dataclass(frozen=True, slots=True)
class StepRuntime:
    # Collaborators a batch hands down to every step it builds, nested batches included.
    # The default scheduler binds the running asyncio loop lazily; outside one, pass a scheduler.
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    document: Document | None = None
    log_sink: LogSink = field(default_factory=StdoutLogSink)
