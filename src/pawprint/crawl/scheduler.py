"""Crawl scheduler — discover, render and write every reachable route.

Owns the route arena (every route seen, in first-discovery order), its
membership index, and the bounded pool of in-flight renders.

Discovery is a closed frontier/processed-set walk, never recursion, so
cyclic link graphs terminate by exhaustion:

    1. Seed the arena with the entry routes.
    2. Dispatch pending routes, in arena order, until ``concurrency``
       renders are in flight.
    3. As renders complete, commit results strictly in arena order:
       mark the route, append newly found links to the arena, map and
       claim its output file, start the write.
    4. Repeat until nothing is pending or in flight, then wait for writes.

Committing in arena order is what makes the output independent of which
render finishes first: links found by the route at position *n* always land
after links found at positions < *n*, and output paths are claimed in the
same order on every run.

Thread Safety:
    The arena, index and manifest are touched only from the event loop
    running ``run()`` (single mutator).  Renders and writes may run in
    worker threads but never mutate scheduler state.

"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

from pawprint._errors import (
    CollisionError,
    ConfigError,
    ExportError,
    LinkExtractionError,
)
from pawprint.routes.path import RouteRecord, normalize_route

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pawprint._types import FailurePolicy, RoutePath
    from pawprint.export.manifest import BuildManifest
    from pawprint.export.mapper import OutputEntry, OutputMapper, OutputRegistry
    from pawprint.export.writer import OutputWriter
    from pawprint.observability.collector import BuildCollector
    from pawprint.render.links import LinkExtractor
    from pawprint.render.resolver import RenderResult, RouteResolver


class CrawlScheduler:
    """Bounded-concurrency crawl over the application's routes.

    Args:
        resolver: Renders and classifies a single route.
        extractor: Finds route links in rendered pages.
        mapper: Maps routes to output paths.
        registry: Build-wide claimed output paths (shared with the fallback
            and asset steps).
        writer: Writes claimed entries to disk.
        manifest: Build-wide accumulator for files, warnings and errors.
        concurrency: Default maximum renders in flight.
        crawl: Follow links found in rendered pages.
        has_fallback: Whether a fallback document can serve routes that
            could not be prerendered.
        on_dynamic: ``fatal`` treats every non-prerenderable route as an error.
        on_render_error: ``fatal`` treats every failed render as an error.
        collector: Optional observability collector.
        verbose: Print a line per route to stderr.

    """

    def __init__(
        self,
        resolver: RouteResolver,
        extractor: LinkExtractor,
        mapper: OutputMapper,
        registry: OutputRegistry,
        writer: OutputWriter,
        manifest: BuildManifest,
        *,
        concurrency: int = 4,
        crawl: bool = True,
        has_fallback: bool = True,
        on_dynamic: FailurePolicy = "warn",
        on_render_error: FailurePolicy = "warn",
        collector: BuildCollector | None = None,
        verbose: bool = False,
    ) -> None:
        self._resolver = resolver
        self._extractor = extractor
        self._mapper = mapper
        self._registry = registry
        self._writer = writer
        self._manifest = manifest
        self._concurrency = concurrency
        self._crawl = crawl
        self._has_fallback = has_fallback
        self._on_dynamic = on_dynamic
        self._on_render_error = on_render_error
        self._collector = collector
        self._verbose = verbose

        self._arena: list[RouteRecord] = []
        self._index: dict[RoutePath, RouteRecord] = {}
        self._writes: set[asyncio.Task[None]] = set()
        self._aborted = False

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def routes(self) -> tuple[RouteRecord, ...]:
        """Every route seen, in first-discovery order."""
        return tuple(self._arena)

    @property
    def frontier(self) -> tuple[RoutePath, ...]:
        """Routes discovered but not yet dispatched."""
        return tuple(r.path for r in self._arena if r.status == "pending")

    @property
    def processed(self) -> frozenset[RoutePath]:
        """Routes whose render has been committed."""
        return frozenset(
            r.path for r in self._arena if r.status not in ("pending", "in-progress")
        )

    @property
    def aborted(self) -> bool:
        return self._aborted

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------

    async def run(
        self,
        entry_routes: Iterable[str],
        concurrency_limit: int | None = None,
    ) -> BuildManifest:
        """Crawl from *entry_routes* and return the shared manifest.

        Raises:
            ConfigError: If the concurrency limit is below 1 or an entry
                route is not an absolute path.

        """
        limit = self._concurrency if concurrency_limit is None else concurrency_limit
        if limit < 1:
            msg = f"concurrency limit must be at least 1, got {limit}"
            raise ConfigError(msg)

        for entry in entry_routes:
            try:
                path = normalize_route(entry)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
            self._discover(path, parent=None)

        running: dict[asyncio.Task[RenderResult], int] = {}
        completed: dict[int, tuple[RenderResult, int]] = {}
        next_dispatch = 0
        next_commit = 0

        try:
            while True:
                while (
                    not self._aborted
                    and next_dispatch < len(self._arena)
                    and len(running) < limit
                ):
                    record = self._arena[next_dispatch]
                    record.status = "in-progress"
                    task = asyncio.create_task(self._resolver.resolve(record.path))
                    running[task] = next_dispatch
                    next_dispatch += 1

                if not running:
                    break

                done, _ = await asyncio.wait(running, return_when=asyncio.FIRST_COMPLETED)
                in_flight = len(running)
                for task in done:
                    completed[running.pop(task)] = (task.result(), in_flight)

                while next_commit in completed and not self._aborted:
                    result, seen_in_flight = completed.pop(next_commit)
                    self._commit(self._arena[next_commit], result, seen_in_flight)
                    next_commit += 1

                if self._aborted:
                    break
        finally:
            await self._cancel(running)
            for index in completed:
                # Rendered but never committed because the crawl aborted
                self._arena[index].status = "pending"
                self._arena[index].reason = "cancelled"
            if self._writes:
                await asyncio.gather(*self._writes)

        self._manifest.set_routes(self.routes)
        return self._manifest

    def _discover(self, path: RoutePath, parent: RoutePath | None) -> bool:
        """Add *path* to the arena unless it is already known."""
        if path in self._index:
            return False
        record = RouteRecord(path=path, index=len(self._arena), parent=parent)
        self._arena.append(record)
        self._index[path] = record
        return True

    async def _cancel(self, running: dict[asyncio.Task[RenderResult], int]) -> None:
        """Cancel in-flight renders after an abort."""
        if not running:
            return
        for task in running:
            task.cancel()
        await asyncio.gather(*running, return_exceptions=True)
        for index in running.values():
            record = self._arena[index]
            record.status = "pending"
            record.reason = "cancelled"
        running.clear()

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def _commit(self, record: RouteRecord, result: RenderResult, in_flight: int) -> None:
        """Apply one render result.  Called in arena order only."""
        record.attempts = result.attempts
        record.outcome = result.kind
        path = record.path
        links: list[RoutePath] = []

        if result.retried and result.kind != "failed":
            self._manifest.warn(
                "retry",
                f"rendered after {result.attempts} attempts "
                f"({'; '.join(result.transient_errors)})",
                path,
            )

        if result.kind == "static":
            record.status = "succeeded"
            content = result.content or b""
            self._claim_and_write(record, content)
            if self._crawl:
                links = self._links_from_page(path, content, result.links)
        elif result.kind == "redirect":
            record.status = "succeeded"
            record.redirect_target = result.redirect_target
            target = self._extractor.to_route(
                result.redirect_target or "", self._extractor.origin + path,
            )
            if target is None:
                self._manifest.warn(
                    "redirect", f"redirects off-site to {result.redirect_target}", path,
                )
            elif self._crawl and target != path:
                links = [target]
        elif result.kind == "dynamic":
            record.status = "skipped"
            record.reason = result.reason
            self._report_dynamic(path)
        else:
            record.status = "failed"
            record.reason = result.reason
            message = result.reason or "render failed"
            if self._on_render_error == "fatal":
                self._manifest.error("render", message, path)
            else:
                self._manifest.warn("render", message, path)

        found = sum(1 for link in links if self._discover(link, parent=path))

        if self._collector is not None:
            self._collector.record_route(
                path,
                result.kind,
                attempts=result.attempts,
                links_found=found,
                in_flight=in_flight,
                duration_ms=result.duration_ms,
            )
        if self._verbose:
            print(f"  {result.kind:<8} {path}", file=sys.stderr)

    def _claim_and_write(self, record: RouteRecord, content: bytes) -> None:
        try:
            entry = self._mapper.map_to_file(record.path, content)
        except ExportError as exc:
            record.status = "failed"
            record.reason = str(exc)
            self._manifest.error("write", str(exc), record.path)
            return

        try:
            self._registry.claim(entry.path, record.path)
        except CollisionError as exc:
            record.status = "failed"
            record.reason = str(exc)
            self._manifest.error("collision", str(exc), record.path)
            self._aborted = True
            return

        record.output_path = entry.path
        task = asyncio.create_task(self._write(record.index, entry))
        self._writes.add(task)

    async def _write(self, index: int, entry: OutputEntry) -> None:
        try:
            exported = await self._writer.write_async(entry)
        except OSError as exc:
            self._manifest.error("write", f"cannot write {entry.path}: {exc}", entry.route)
            return
        self._manifest.add_page(index, exported)

    def _links_from_page(
        self,
        path: RoutePath,
        content: bytes,
        hints: tuple[str, ...],
    ) -> list[RoutePath]:
        try:
            links = list(self._extractor.extract_links(path, content))
        except LinkExtractionError as exc:
            self._manifest.warn("links", str(exc), path)
            links = []

        page_url = self._extractor.origin + path
        for hint in hints:
            target = self._extractor.to_route(hint, page_url)
            if target is not None and target != path and target not in links:
                links.append(target)
        return links

    def _report_dynamic(self, path: RoutePath) -> None:
        if not self._has_fallback:
            self._manifest.error(
                "dynamic",
                "requires a live server and no fallback is configured to serve it",
                path,
            )
        elif self._on_dynamic == "fatal":
            self._manifest.error("dynamic", "requires a live server", path)
        else:
            self._manifest.warn(
                "dynamic", "requires a live server; left to the fallback", path,
            )
