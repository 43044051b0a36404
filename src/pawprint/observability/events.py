"""Event model for build observability.

Defines event types emitted while a static export runs: one per resolved
route, one per written file, and generic pipeline steps.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias


# ---------------------------------------------------------------------------
# Crawl events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RouteResolved:
    """A route finished rendering (successfully or not).

    Attributes:
        path: Route that was rendered.
        kind: Outcome classification (static, dynamic, redirect, failed).
        attempts: Render attempts made, retries included.
        links_found: Number of new routes this page added to the frontier.
        in_flight: Renders in flight, this one included, when its completion
            was observed.
        duration_ms: Time spent rendering, across attempts.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: Literal["static", "dynamic", "redirect", "failed"]
    attempts: int
    links_found: int
    in_flight: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Output events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileWritten:
    """A file was written to the output tree.

    Attributes:
        source: Route or label the file belongs to.
        target: Output-relative path.
        size_bytes: Bytes written.
        duration_ms: Time taken to write.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    target: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A pipeline step completed.

    Attributes:
        kind: The type of build action.
        source: Source (or description).
        target: Output (or description).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: Literal["clean", "crawl", "copy_asset", "fallback", "sitemap", "compress", "custom"]
    source: str
    target: str
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

StackEvent: TypeAlias = RouteResolved | FileWritten | BuildEvent


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
