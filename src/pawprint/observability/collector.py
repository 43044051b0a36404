"""Build collector — the write side of build observability.

Components never build events themselves; they call ``record_*`` methods on
a ``BuildCollector``, which stamps and stores them in an ``EventLog``.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from pawprint.observability.events import BuildEvent, FileWritten, RouteResolved, now_ns
from pawprint.observability.log import EventLog


class BuildCollector:
    """Event collector for one or more builds.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_route(
        self,
        path: str,
        kind: str,
        *,
        attempts: int = 1,
        links_found: int = 0,
        in_flight: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a resolved route."""
        self._log.append(
            RouteResolved(
                path=path,
                kind=kind,  # type: ignore[arg-type]
                attempts=attempts,
                links_found=links_found,
                in_flight=in_flight,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_write(
        self,
        source: str,
        target: str,
        *,
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a file written to the output tree."""
        self._log.append(
            FileWritten(
                source=source,
                target=target,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_build(
        self,
        kind: str,
        source: str,
        target: str,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a build pipeline step."""
        self._log.append(
            BuildEvent(
                kind=kind,  # type: ignore[arg-type]
                source=source,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
