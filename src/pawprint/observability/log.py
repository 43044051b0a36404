"""Event log — queryable, thread-safe store of build events.

Keeps a bounded ring buffer of ``StackEvent`` objects so a finished build
can be inspected: which routes rendered, how often they were retried, what
was written where.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Renders that run in
    worker threads may record into the same log as the event loop.

"""

import threading
from collections import deque
from collections.abc import Sequence
from typing import Any

from pawprint.observability.events import FileWritten, RouteResolved, StackEvent


class EventLog:
    """Bounded event store with query support.

    When the buffer is full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[StackEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: StackEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Sequence[StackEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        limit: int = 100,
    ) -> list[StackEvent]:
        """Query events, most recent first.

        Args:
            event_type: Only return events of this type.
            path: Only return events whose route/source equals this path.
            limit: Maximum number of events to return.

        """
        with self._lock:
            events = list(self._events)

        results: list[StackEvent] = []
        for event in reversed(events):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if path is not None:
                event_path = getattr(event, "path", None) or getattr(event, "source", "")
                if event_path != path:
                    continue
            results.append(event)
        return results

    def routes(self) -> list[RouteResolved]:
        """Resolved-route events in the order they completed."""
        with self._lock:
            return [e for e in self._events if isinstance(e, RouteResolved)]

    def max_in_flight(self) -> int:
        """Highest number of renders observed running at once."""
        return max((e.in_flight for e in self.routes()), default=0)

    def bytes_written(self) -> int:
        with self._lock:
            return sum(e.size_bytes for e in self._events if isinstance(e, FileWritten))

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about stored events."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        outcome_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1
            if isinstance(event, RouteResolved):
                outcome_counts[event.kind] = outcome_counts.get(event.kind, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
            "by_outcome": outcome_counts,
        }
