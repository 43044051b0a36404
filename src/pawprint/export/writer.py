"""Output writer — put planned OutputEntries on disk.

Writes run in a worker thread so the crawl loop keeps dispatching renders
while files are flushed.  Collision checks happen before an entry reaches
the writer, so two writers never target the same file.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint.export.manifest import ExportedFile

if TYPE_CHECKING:
    from pawprint.export.mapper import OutputEntry
    from pawprint.observability.collector import BuildCollector


def write_bytes(filepath: Path, data: bytes) -> int:
    """Write *data* to *filepath*, creating parent dirs as needed.

    Returns the size in bytes of the written file.

    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_bytes(data)
    return len(data)


class OutputWriter:
    """Writes entries under a fixed output directory.

    Args:
        output_dir: Root export output directory.
        collector: Optional collector that receives a ``FileWritten`` event
            per file.

    """

    __slots__ = ("_collector", "_output_dir")

    def __init__(self, output_dir: Path, collector: BuildCollector | None = None) -> None:
        self._output_dir = output_dir
        self._collector = collector

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def target(self, entry: OutputEntry) -> Path:
        return self._output_dir.joinpath(*entry.path.split("/"))

    def write(self, entry: OutputEntry) -> ExportedFile:
        """Write *entry* synchronously.

        Raises:
            OSError: If the file cannot be written.

        """
        t0 = time.perf_counter()
        filepath = self.target(entry)
        size = write_bytes(filepath, entry.payload or b"")
        elapsed = (time.perf_counter() - t0) * 1000

        if self._collector is not None:
            self._collector.record_write(
                entry.route, entry.path, size_bytes=size, duration_ms=elapsed,
            )

        return ExportedFile(
            source_path=entry.route,
            output_path=filepath,
            source_type=entry.source_type,
            size_bytes=size,
            duration_ms=elapsed,
        )

    async def write_async(self, entry: OutputEntry) -> ExportedFile:
        """Write *entry* from a worker thread."""
        return await asyncio.to_thread(self.write, entry)
