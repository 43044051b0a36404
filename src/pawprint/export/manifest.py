"""Build manifest — the single authority on what a build produced.

Every component gets a handle to the same ``BuildManifest`` and appends to
it: files written, warnings, fatal errors, and the route records the crawl
kept.  Nothing is removed.  ``finalize()`` freezes it into a
``BuildOutcome``, whose ``success`` is the build's exit status.

Thread Safety:
    Appends happen from the crawl scheduler's event loop only (single
    mutator).  The outcome is frozen and safe to share.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from pawprint.routes.path import RouteRecord

IssueKind: TypeAlias = Literal[
    "render", "retry", "dynamic", "links", "redirect",
    "collision", "fallback", "config", "write",
]


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (e.g., ``"/docs/getting-started/"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "fallback", "asset", "sitemap", "compressed"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class BuildIssue:
    """A warning or error raised during the build.

    Attributes:
        kind: What part of the build raised it.
        message: Human-readable description.
        route: Route involved, if any.

    """

    kind: IssueKind
    message: str
    route: str | None = None

    def __str__(self) -> str:
        if self.route:
            return f"{self.route}: {self.message}"
        return self.message


@dataclass(frozen=True, slots=True)
class BuildOutcome:
    """Final, frozen result of a build.

    Attributes:
        success: True when the build produced no errors.
        files: Files written, pages in first-discovery order first.
        warnings: Non-fatal issues.
        errors: Fatal issues.
        routes: Every route the crawl saw, in first-discovery order.
        duration_ms: Total wall-clock time for the build.
        output_dir: Absolute path to the output directory.

    """

    success: bool
    files: tuple[ExportedFile, ...]
    warnings: tuple[BuildIssue, ...]
    errors: tuple[BuildIssue, ...]
    routes: tuple[RouteRecord, ...] = ()
    duration_ms: float = 0.0
    output_dir: Path = field(default_factory=Path)

    @property
    def written_files(self) -> tuple[Path, ...]:
        return tuple(f.output_path for f in self.files)

    @property
    def total_pages(self) -> int:
        return sum(1 for f in self.files if f.source_type == "page")

    @property
    def total_assets(self) -> int:
        return sum(1 for f in self.files if f.source_type == "asset")

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


class BuildManifest:
    """Append-only accumulator for one build.

    Pages are recorded against their route's discovery index so the final
    ordering does not depend on which write finished first.

    Args:
        output_dir: Root export output directory.

    """

    __slots__ = (
        "_errors", "_files", "_finalized", "_output_dir", "_pages", "_routes", "_warnings",
    )

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir
        self._pages: dict[int, ExportedFile] = {}
        self._files: list[ExportedFile] = []
        self._warnings: list[BuildIssue] = []
        self._errors: list[BuildIssue] = []
        self._routes: tuple[RouteRecord, ...] = ()
        self._finalized = False

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def add_page(self, index: int, exported: ExportedFile) -> None:
        """Record a page written for the route at discovery *index*."""
        self._pages[index] = exported

    def add_file(self, exported: ExportedFile) -> None:
        """Record a non-page file (fallback, asset, sitemap, ...)."""
        self._files.append(exported)

    def warn(self, kind: IssueKind, message: str, route: str | None = None) -> None:
        self._warnings.append(BuildIssue(kind=kind, message=message, route=route))

    def error(self, kind: IssueKind, message: str, route: str | None = None) -> None:
        self._errors.append(BuildIssue(kind=kind, message=message, route=route))

    def set_routes(self, routes: tuple[RouteRecord, ...]) -> None:
        self._routes = routes

    @property
    def pages(self) -> tuple[ExportedFile, ...]:
        return tuple(self._pages[i] for i in sorted(self._pages))

    @property
    def files(self) -> tuple[ExportedFile, ...]:
        return self.pages + tuple(self._files)

    @property
    def warnings(self) -> tuple[BuildIssue, ...]:
        return tuple(self._warnings)

    @property
    def errors(self) -> tuple[BuildIssue, ...]:
        return tuple(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def finalize(self, *, duration_ms: float = 0.0) -> BuildOutcome:
        """Freeze the manifest into a BuildOutcome.

        Raises:
            RuntimeError: If called twice.

        """
        if self._finalized:
            msg = "BuildManifest.finalize() called twice"
            raise RuntimeError(msg)
        self._finalized = True
        return BuildOutcome(
            success=not self._errors,
            files=self.files,
            warnings=self.warnings,
            errors=self.errors,
            routes=self._routes,
            duration_ms=duration_ms,
            output_dir=self._output_dir,
        )


def finalize(
    outputs: tuple[ExportedFile, ...] | list[ExportedFile],
    warnings: tuple[BuildIssue, ...] | list[BuildIssue],
    errors: tuple[BuildIssue, ...] | list[BuildIssue],
    *,
    output_dir: Path | None = None,
) -> BuildOutcome:
    """Build an outcome directly from collected parts."""
    return BuildOutcome(
        success=not errors,
        files=tuple(outputs),
        warnings=tuple(warnings),
        errors=tuple(errors),
        output_dir=output_dir or Path(),
    )
