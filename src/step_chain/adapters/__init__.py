from .asyncio_scheduler import AsyncioScheduler
from .manual_scheduler import ManualScheduler, ManualTimer
from .memory_document import MemoryDocument, MemoryElement, SimulationError

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "ManualTimer",
    "MemoryDocument",
    "MemoryElement",
    "SimulationError",
]
