"""Pawprint configuration.

ExportConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from pawprint._errors import ConfigError

_TRAILING_SLASH_MODES = frozenset({"always", "never", "ignore"})
_POLICIES = frozenset({"warn", "fatal"})


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Configuration for a static export.

    Attributes:
        root: Project root directory.  Always resolved to an absolute path
              on construction.
        output: Output directory for the exported tree.
        entries: Seed routes for the crawl, in order.  May be empty.
        fallback: Output-relative name of the SPA fallback document.
            ``None`` or ``""`` disables the fallback.
        shell: Path to the shell template used for the fallback.  ``None``
            uses the built-in minimal shell.
        client_entry: URL of the client router module the shell loads.
        concurrency: Maximum number of routes rendered at the same time.
        crawl: Follow links found in rendered pages.  When off, only
            ``entries`` are rendered.
        max_retries: Extra attempts after a transient render failure.
        render_timeout: Seconds before a single render attempt is abandoned
            (``None`` waits forever).
        trailing_slash: ``always`` writes ``about/index.html``, ``never``
            writes ``about.html``, ``ignore`` follows the route as written.
        extension: Extension of rendered documents.
        case_insensitive: Compare output paths case-insensitively when
            checking for collisions.
        on_dynamic: ``fatal`` fails the build for any route that needs a
            live server, even when a fallback can serve it.
        on_render_error: ``fatal`` fails the build for any route that could
            not be rendered.
        origin: Origin the app is assumed to live on; absolute links to it
            count as internal.
        assets_dir: Directory of static assets copied to the output root.
        base_url: Public base URL (used for sitemap generation).
        precompress: Write ``.gz`` siblings for text outputs.
        renderer: Dotted path to the render collaborator, e.g.
            ``app.render:render`` or ``render.py:render``.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("build"))
    entries: tuple[str, ...] = ("/",)
    fallback: str | None = "200.html"
    shell: Path | None = None
    client_entry: str = "/app.js"
    concurrency: int = 4
    crawl: bool = True
    max_retries: int = 2
    render_timeout: float | None = 30.0
    trailing_slash: str = "always"
    extension: str = "html"
    case_insensitive: bool = False
    on_dynamic: str = "warn"
    on_render_error: str = "warn"
    origin: str = "http://localhost"
    assets_dir: str | None = "static"
    base_url: str = ""
    precompress: bool = False
    renderer: str | None = None

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if isinstance(self.entries, (list, str)):
            entries = [self.entries] if isinstance(self.entries, str) else self.entries
            object.__setattr__(self, "entries", tuple(entries))
        if self.shell is not None and not isinstance(self.shell, Path):
            object.__setattr__(self, "shell", Path(str(self.shell)))
        self._validate()

    def _validate(self) -> None:
        if self.concurrency < 1:
            msg = f"concurrency must be at least 1, got {self.concurrency}"
            raise ConfigError(msg)
        if self.max_retries < 0:
            msg = f"max_retries must not be negative, got {self.max_retries}"
            raise ConfigError(msg)
        if self.render_timeout is not None and self.render_timeout <= 0:
            msg = f"render_timeout must be positive, got {self.render_timeout}"
            raise ConfigError(msg)
        if self.trailing_slash not in _TRAILING_SLASH_MODES:
            msg = (
                f"trailing_slash must be one of {sorted(_TRAILING_SLASH_MODES)}, "
                f"got {self.trailing_slash!r}"
            )
            raise ConfigError(msg)
        for name in ("on_dynamic", "on_render_error"):
            value = getattr(self, name)
            if value not in _POLICIES:
                msg = f"{name} must be 'warn' or 'fatal', got {value!r}"
                raise ConfigError(msg)
        if not self.extension or "/" in self.extension or self.extension.startswith("."):
            msg = f"extension must be a bare suffix like 'html', got {self.extension!r}"
            raise ConfigError(msg)
        for entry in self.entries:
            if not isinstance(entry, str) or not entry.startswith("/"):
                msg = f"Entry routes must be absolute paths, got {entry!r}"
                raise ConfigError(msg)
        if self.fallback:
            name = PurePosixPath(self.fallback)
            if name.is_absolute() or ".." in name.parts or self.fallback.endswith("/"):
                msg = (
                    f"fallback must be a file name relative to the output "
                    f"directory, got {self.fallback!r}"
                )
                raise ConfigError(msg)

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def assets_path(self) -> Path | None:
        """Absolute path to the static assets directory, if configured."""
        if not self.assets_dir:
            return None
        return self.root / self.assets_dir

    @property
    def shell_path(self) -> Path | None:
        """Absolute path to the shell template, if configured."""
        if self.shell is None:
            return None
        if self.shell.is_absolute():
            return self.shell
        return self.root / self.shell

    @property
    def has_fallback(self) -> bool:
        """Whether a fallback document will be produced."""
        return bool(self.fallback)
