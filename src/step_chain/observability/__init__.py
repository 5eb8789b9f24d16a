from .logging import JsonlLogSink, LogMessage, MemoryLogSink, StdoutLogSink, log_to_dict

__all__ = ["JsonlLogSink", "LogMessage", "MemoryLogSink", "StdoutLogSink", "log_to_dict"]
