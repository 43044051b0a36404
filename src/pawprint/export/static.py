"""Static export — crawl the app and write it out as plain files.

Turns an application's routes into a directory a plain file host can serve,
plus one fallback shell document for every path that could not be
prerendered.  Rendering is delegated to an external render collaborator;
this module wires the crawl, output mapping, fallback, assets and sitemap
together and leaves the verdict to the build manifest.
"""

from __future__ import annotations

import asyncio
import shutil
import time
from typing import TYPE_CHECKING

from pawprint._errors import CollisionError, ConfigError, FallbackError
from pawprint.crawl.scheduler import CrawlScheduler
from pawprint.export.assets import copy_assets, precompress, reserve_assets
from pawprint.export.fallback import build_fallback, load_shell
from pawprint.export.manifest import BuildManifest, BuildOutcome
from pawprint.export.mapper import OutputMapper, OutputRegistry
from pawprint.export.sitemap import write_sitemap
from pawprint.export.writer import OutputWriter
from pawprint.render.links import LinkExtractor
from pawprint.render.resolver import RouteResolver

if TYPE_CHECKING:
    from pathlib import Path

    from pawprint._types import RenderFunc
    from pawprint.config import ExportConfig
    from pawprint.export.mapper import OutputEntry
    from pawprint.observability.collector import BuildCollector


class StaticExporter:
    """Exports an application as static files.

    Args:
        render: The render collaborator, ``render(route) -> RenderResponse``
            (sync or async).
        config: Frozen export configuration.
        collector: Optional observability collector.
        verbose: Print a line per resolved route to stderr.

    """

    def __init__(
        self,
        render: RenderFunc,
        config: ExportConfig,
        *,
        collector: BuildCollector | None = None,
        verbose: bool = False,
    ) -> None:
        self._render = render
        self._config = config
        self._collector = collector
        self._verbose = verbose

    def export(self) -> BuildOutcome:
        """Run the full export pipeline synchronously."""
        return asyncio.run(self.export_async())

    async def export_async(self) -> BuildOutcome:
        """Run the full export pipeline and return the outcome.

        Pipeline order:
            1. Clean output directory
            2. Reserve asset and fallback paths, build the fallback
            3. Copy static assets
            4. Crawl and write pages
            5. Write the fallback document
            6. Generate sitemap (if base_url configured)
            7. Precompress text outputs (if enabled)

        Structural failures (collisions, a broken fallback, bad
        configuration) are recorded in the manifest rather than raised, so
        the outcome is always the single verdict on the build.

        """
        start = time.perf_counter()
        config = self._config
        output_dir = config.output_path
        manifest = BuildManifest(output_dir)
        registry = OutputRegistry(case_insensitive=config.case_insensitive)
        writer = OutputWriter(output_dir, self._collector)

        # 1. Clean output directory
        self._clean_output(output_dir)

        # 2. Reserve fixed outputs, build the fallback
        fallback = self._prepare_fallback(registry, manifest)
        assets = self._reserve_assets(registry, manifest)

        if not manifest.has_errors:
            # 3. Copy static assets
            if assets:
                self._copy_assets(assets, output_dir, manifest)

            # 4. Crawl
            await self._crawl(registry, writer, manifest)

        # 5. Fallback is written whenever it was built, whatever the crawl did
        if fallback is not None:
            self._write_fallback(fallback, writer, manifest)

        # 6. Sitemap
        if config.base_url and not manifest.has_errors:
            self._generate_sitemap(output_dir, registry, manifest)

        # 7. Precompression
        if config.precompress and not manifest.has_errors:
            self._precompress(output_dir, registry, manifest)

        elapsed = (time.perf_counter() - start) * 1000
        return manifest.finalize(duration_ms=elapsed)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        t0 = time.perf_counter()
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        if self._collector is not None:
            self._collector.record_build(
                "clean", str(output_dir), str(output_dir),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    def _prepare_fallback(
        self, registry: OutputRegistry, manifest: BuildManifest,
    ) -> OutputEntry | None:
        """Build the fallback entry and claim its path before any route can."""
        config = self._config
        if not config.fallback:
            return None
        try:
            shell = load_shell(config.shell_path)
            entry = build_fallback(shell, config.fallback, client_entry=config.client_entry)
            registry.claim(entry.path, entry.route)
        except FallbackError as exc:
            manifest.error("fallback", str(exc))
            return None
        return entry

    def _reserve_assets(
        self, registry: OutputRegistry, manifest: BuildManifest,
    ) -> tuple[Path, ...]:
        assets_path = self._config.assets_path
        if assets_path is None:
            return ()
        try:
            return reserve_assets(assets_path, registry)
        except CollisionError as exc:
            manifest.error("collision", str(exc))
            return ()

    def _copy_assets(
        self, assets: tuple[Path, ...], output_dir: Path, manifest: BuildManifest,
    ) -> None:
        assets_path = self._config.assets_path
        if assets_path is None:
            return
        t0 = time.perf_counter()
        try:
            copied = copy_assets(assets_path, output_dir, assets)
        except OSError as exc:
            manifest.error("write", f"cannot copy assets: {exc}")
            return
        for exported in copied:
            manifest.add_file(exported)
        if self._collector is not None:
            self._collector.record_build(
                "copy_asset", str(assets_path), str(output_dir),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    async def _crawl(
        self,
        registry: OutputRegistry,
        writer: OutputWriter,
        manifest: BuildManifest,
    ) -> None:
        config = self._config
        scheduler = CrawlScheduler(
            RouteResolver(
                self._render,
                max_retries=config.max_retries,
                timeout=config.render_timeout,
            ),
            LinkExtractor(config.origin),
            OutputMapper(config.trailing_slash, config.extension),  # type: ignore[arg-type]
            registry,
            writer,
            manifest,
            concurrency=config.concurrency,
            crawl=config.crawl,
            has_fallback=config.has_fallback,
            on_dynamic=config.on_dynamic,  # type: ignore[arg-type]
            on_render_error=config.on_render_error,  # type: ignore[arg-type]
            collector=self._collector,
            verbose=self._verbose,
        )
        t0 = time.perf_counter()
        try:
            await scheduler.run(config.entries)
        except ConfigError as exc:
            manifest.error("config", str(exc))
        if self._collector is not None:
            self._collector.record_build(
                "crawl",
                ", ".join(config.entries) or "(no entries)",
                f"{len(scheduler.routes)} routes",
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    def _write_fallback(
        self, entry: OutputEntry, writer: OutputWriter, manifest: BuildManifest,
    ) -> None:
        t0 = time.perf_counter()
        try:
            exported = writer.write(entry)
        except OSError as exc:
            manifest.error("fallback", f"cannot write {entry.path}: {exc}")
            return
        manifest.add_file(exported)
        if self._collector is not None:
            self._collector.record_build(
                "fallback", "shell", entry.path,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    def _precompress(
        self, output_dir: Path, registry: OutputRegistry, manifest: BuildManifest,
    ) -> None:
        t0 = time.perf_counter()
        try:
            compressed = precompress(manifest.files, registry, output_dir)
        except CollisionError as exc:
            manifest.error("collision", str(exc))
            return
        for exported in compressed:
            manifest.add_file(exported)
        if self._collector is not None:
            self._collector.record_build(
                "compress", f"{len(compressed)} files", str(output_dir),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    def _generate_sitemap(
        self, output_dir: Path, registry: OutputRegistry, manifest: BuildManifest,
    ) -> None:
        try:
            exported = write_sitemap(manifest.pages, self._config.base_url, output_dir, registry)
        except CollisionError as exc:
            manifest.error("collision", str(exc))
            return
        if exported is not None:
            manifest.add_file(exported)
            if self._collector is not None:
                self._collector.record_build(
                    "sitemap", "pages", str(exported.output_path),
                    duration_ms=exported.duration_ms,
                )

