"""Tests for pawprint.observability — build events, log and collector."""

import threading

from pawprint.observability.collector import BuildCollector
from pawprint.observability.events import BuildEvent, FileWritten, RouteResolved, now_ns
from pawprint.observability.log import EventLog


def _route(path: str, kind: str = "static", in_flight: int = 1) -> RouteResolved:
    return RouteResolved(
        path=path, kind=kind, attempts=1, links_found=0,  # type: ignore[arg-type]
        in_flight=in_flight, duration_ms=1.0, timestamp_ns=now_ns(),
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_route("/"))
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        log.append_many([_route(f"/{i}") for i in range(10)])
        assert len(log) == 5
        assert log.query(limit=1)[0].path == "/9"  # type: ignore[union-attr]

    def test_query_newest_first(self) -> None:
        log = EventLog()
        log.append(_route("/a"))
        log.append(_route("/b"))
        assert [e.path for e in log.query()] == ["/b", "/a"]  # type: ignore[union-attr]

    def test_query_by_type_and_path(self) -> None:
        log = EventLog()
        log.append(_route("/a"))
        log.append(FileWritten(
            source="/a", target="a/index.html", size_bytes=5,
            duration_ms=0.1, timestamp_ns=now_ns(),
        ))
        log.append(_route("/b"))

        assert len(log.query(event_type=FileWritten)) == 1
        assert len(log.query(path="/a")) == 2
        assert log.query(path="/a/") == []

    def test_max_in_flight(self) -> None:
        log = EventLog()
        assert log.max_in_flight() == 0
        log.append_many([_route("/a", in_flight=2), _route("/b", in_flight=4), _route("/c", in_flight=1)])
        assert log.max_in_flight() == 4

    def test_stats(self) -> None:
        log = EventLog()
        log.append_many([_route("/a"), _route("/b", "failed"), _route("/c")])
        log.append(BuildEvent(
            kind="clean", source="out", target="out", duration_ms=0.0, timestamp_ns=now_ns(),
        ))
        stats = log.stats()
        assert stats["total"] == 4
        assert stats["by_type"] == {"RouteResolved": 3, "BuildEvent": 1}
        assert stats["by_outcome"] == {"static": 2, "failed": 1}

    def test_clear(self) -> None:
        log = EventLog()
        log.append_many([_route("/a"), _route("/b")])
        assert log.clear() == 2
        assert len(log) == 0

    def test_thread_safety(self) -> None:
        log = EventLog(max_events=10_000)

        def writer(prefix: str) -> None:
            for i in range(500):
                log.append(_route(f"/{prefix}/{i}"))

        threads = [threading.Thread(target=writer, args=(str(n),)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(log) == 2000


# ---------------------------------------------------------------------------
# BuildCollector
# ---------------------------------------------------------------------------


class TestBuildCollector:
    def test_default_log(self) -> None:
        assert isinstance(BuildCollector().log, EventLog)

    def test_record_route(self) -> None:
        collector = BuildCollector()
        collector.record_route("/a", "redirect", attempts=2, links_found=1, in_flight=3)
        event = collector.log.routes()[0]
        assert event.kind == "redirect"
        assert event.attempts == 2
        assert event.in_flight == 3

    def test_record_write(self) -> None:
        collector = BuildCollector()
        collector.record_write("/a", "a/index.html", size_bytes=42)
        collector.record_write("/b", "b/index.html", size_bytes=8)
        assert collector.log.bytes_written() == 50

    def test_record_build(self) -> None:
        collector = BuildCollector()
        collector.record_build("sitemap", "pages", "sitemap.xml", duration_ms=2.0)
        (event,) = collector.log.query(event_type=BuildEvent)
        assert event.kind == "sitemap"  # type: ignore[union-attr]
