"""Build observability — structured events for every export.

Records what happened during a build:
- **Crawl**: each route resolved, with its outcome and retry count
- **Output**: each file written, with its size
- **Pipeline**: clean, asset copy, fallback, sitemap, compression steps

All events are frozen dataclasses with nanosecond timestamps, safe to
produce from worker threads.

Quick Start:
    >>> from pawprint.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> # Pass collector to StaticExporter(..., collector=collector)
    >>> log.stats()["by_outcome"]

"""

from pawprint.observability.collector import BuildCollector
from pawprint.observability.events import (
    BuildEvent,
    FileWritten,
    RouteResolved,
    StackEvent,
    now_ns,
)
from pawprint.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildEvent",
    "EventLog",
    "FileWritten",
    "RouteResolved",
    "StackEvent",
    "now_ns",
]
