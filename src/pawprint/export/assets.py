"""Asset handling — copy static assets and precompress text outputs.

Copies files from the project's assets directory into the export output root,
preserving directory structure, so ``static/favicon.png`` is served at
``/favicon.png``.  Each copied path is claimed in the output registry first,
which makes an asset that shadows a prerendered page a collision.
"""

from __future__ import annotations

import gzip
import shutil
import time
from typing import TYPE_CHECKING

from pawprint.export.manifest import ExportedFile

if TYPE_CHECKING:
    from pathlib import Path

    from pawprint.export.mapper import OutputRegistry

# Files/directories skipped during asset copying
_HIDDEN_PREFIXES = (".", "_")

# Outputs worth compressing
_COMPRESSIBLE_EXTS = frozenset({
    ".html", ".htm", ".css", ".js", ".mjs", ".json", ".xml", ".svg", ".txt",
    ".webmanifest", ".rss", ".atom",
})


def list_assets(static_path: Path) -> tuple[Path, ...]:
    """Return asset files under *static_path*, relative to it, sorted.

    Skips hidden files (names starting with ``.`` or ``_``) and
    ``__pycache__`` directories.
    """
    if not static_path.is_dir():
        return ()

    found: list[Path] = []
    for src_file in sorted(static_path.rglob("*")):
        if not src_file.is_file():
            continue
        relative = src_file.relative_to(static_path)
        if "__pycache__" in relative.parts:
            continue
        if src_file.name.startswith(_HIDDEN_PREFIXES):
            continue
        found.append(relative)
    return tuple(found)


def reserve_assets(static_path: Path, registry: OutputRegistry) -> tuple[Path, ...]:
    """Claim the output path of every asset before the crawl starts.

    Raises:
        CollisionError: If two assets map to the same output path (only
            possible on a case-insensitive registry) or an asset clashes
            with an earlier claim such as the fallback.

    """
    assets = list_assets(static_path)
    for relative in assets:
        registry.claim(relative.as_posix(), f"asset:/{relative.as_posix()}")
    return assets


def copy_assets(
    static_path: Path,
    output_dir: Path,
    assets: tuple[Path, ...] | None = None,
) -> tuple[ExportedFile, ...]:
    """Copy static assets into *output_dir*.

    Args:
        static_path: Source directory (e.g., ``project/static/``).
        output_dir: Root export output directory.
        assets: Relative paths to copy; defaults to everything
            ``list_assets`` finds.

    Returns:
        Tuple of :class:`ExportedFile` entries, one per copied file.

    """
    if assets is None:
        assets = list_assets(static_path)

    results: list[ExportedFile] = []
    for relative in assets:
        t0 = time.perf_counter()

        dest_file = output_dir / relative
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(static_path / relative, dest_file)

        size = dest_file.stat().st_size
        elapsed = (time.perf_counter() - t0) * 1000

        results.append(ExportedFile(
            source_path=f"/{relative.as_posix()}",
            output_path=dest_file,
            source_type="asset",
            size_bytes=size,
            duration_ms=elapsed,
        ))

    return tuple(results)


def precompress(
    files: tuple[ExportedFile, ...] | list[ExportedFile],
    registry: OutputRegistry | None = None,
    output_dir: Path | None = None,
) -> tuple[ExportedFile, ...]:
    """Write a ``.gz`` sibling for every compressible file in *files*.

    Every ``.gz`` destination is claimed in *registry* (paths relative to
    *output_dir*) before anything is written, so an existing output such as
    a shipped ``index.html.gz`` asset is a collision rather than an
    overwrite.  The gzip header carries no timestamp, so identical inputs
    produce identical archives.

    Raises:
        CollisionError: If a ``.gz`` destination is already claimed.

    """
    planned: list[tuple[ExportedFile, Path]] = []
    for exported in files:
        path = exported.output_path
        if path.suffix.lower() not in _COMPRESSIBLE_EXTS or not path.is_file():
            continue
        target = path.with_name(path.name + ".gz")
        if registry is not None and output_dir is not None:
            registry.claim(
                target.relative_to(output_dir).as_posix(), f"gzip:{exported.source_path}",
            )
        planned.append((exported, target))

    results: list[ExportedFile] = []
    for exported, target in planned:
        t0 = time.perf_counter()
        data = gzip.compress(exported.output_path.read_bytes(), compresslevel=9, mtime=0)
        target.write_bytes(data)
        elapsed = (time.perf_counter() - t0) * 1000

        results.append(ExportedFile(
            source_path=exported.source_path,
            output_path=target,
            source_type="compressed",
            size_bytes=len(data),
            duration_ms=elapsed,
        ))

    return tuple(results)
