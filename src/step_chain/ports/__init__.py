from .document import Document
from .log_sink import LogSink
from .scheduler import Scheduler, Timer
from .harness import TestContext

__all__ = ["Document", "LogSink", "Scheduler", "Timer", "TestContext"]
