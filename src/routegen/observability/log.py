"""Event log — bounded history of generator runs.

One log is shared by every run of a CLI session, so in watch mode it holds
the history of all regenerations.  A run marks its start with
:func:`~routegen.observability.events.now_ns` and reads back only its own
events through ``since_ns``.

The watch loop runs the pipeline on the thread that calls
:meth:`RegistryWatcher.run`, so the log is not locked.
"""

from collections import Counter, deque
from typing import Literal

from routegen.observability.events import FunctionSkipped, GeneratorEvent


class EventLog:
    """Ring buffer of generator events.

    When the buffer is full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events",)

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[GeneratorEvent] = deque(maxlen=max_events)

    def append(self, event: GeneratorEvent) -> None:
        """Record an event in the log."""
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
    ) -> list[GeneratorEvent]:
        """Return matching events in the order they were recorded.

        Args:
            event_type: Only return events of this type.
            since_ns: Only return events at or after this timestamp.
            path: Only return events whose path or trigger path contains
                this substring.

        """
        results: list[GeneratorEvent] = []
        for event in self._events:
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None:
                event_path = getattr(event, "path", None) or getattr(event, "trigger_path", "")
                if path not in event_path:
                    continue
            results.append(event)
        return results

    def skipped(
        self,
        *,
        since_ns: int = 0,
        reason: Literal["naming", "parameters"] | None = None,
    ) -> list[FunctionSkipped]:
        """Functions left out of the registry, in scan order."""
        return [
            event
            for event in self.query(event_type=FunctionSkipped, since_ns=since_ns)
            if isinstance(event, FunctionSkipped) and (reason is None or event.reason == reason)
        ]

    def stats(self) -> dict[str, int]:
        """Count retained events by type name, plus a ``total``."""
        counts = Counter(type(event).__name__ for event in self._events)
        return {"total": len(self._events), **dict(sorted(counts.items()))}
