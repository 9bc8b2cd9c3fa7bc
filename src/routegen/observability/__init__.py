"""Generator observability — events, event log and run profiling.

Every generator run records what it scanned, what it skipped and what it
wrote.  In watch mode the log accumulates history across runs.

Quick Start:
    >>> from routegen.observability import EventLog
    >>> log = EventLog()
    >>> # pass log to routegen.pipeline.run_generation(..., log=log)
    >>> skipped = log.skipped(reason="parameters")

"""

from routegen.observability.events import (
    FileScanned,
    FunctionSkipped,
    GenerationProfile,
    GeneratorEvent,
    RegistryWritten,
    now_ns,
)
from routegen.observability.log import EventLog
from routegen.observability.profiler import GenerationProfiler

__all__ = [
    "EventLog",
    "FileScanned",
    "FunctionSkipped",
    "GenerationProfile",
    "GenerationProfiler",
    "GeneratorEvent",
    "RegistryWritten",
    "now_ns",
]
