"""Pawprint application — the public build entry point.

``build()`` loads configuration, resolves the render collaborator, runs the
static export, prints the banner and report, and returns the outcome whose
``success`` is the build's exit status.
"""

import time
from pathlib import Path

from pawprint._errors import ConfigError
from pawprint._types import RenderFunc
from pawprint.config import ExportConfig
from pawprint.config_loader import load_config
from pawprint.export.manifest import BuildIssue, BuildOutcome, finalize
from pawprint.observability import BuildCollector, EventLog


def _resolve_renderer(config: ExportConfig, render: RenderFunc | None) -> RenderFunc:
    """Pick the explicit *render* callable, else load ``config.renderer``.

    Raises:
        ConfigError: If neither is available or the dotted path is broken.

    """
    if render is not None:
        return render
    if not config.renderer:
        msg = (
            "No renderer configured. Pass render=... or set 'renderer' "
            "(e.g. 'app.prerender:render') in pawprint.yaml."
        )
        raise ConfigError(msg)

    from pawprint.render.loader import load_renderer

    return load_renderer(config.renderer, config.root)


def build(
    root: str | Path = ".",
    render: RenderFunc | None = None,
    *,
    collector: BuildCollector | None = None,
    quiet: bool = False,
    verbose: bool = False,
    **kwargs: object,
) -> BuildOutcome:
    """Export the application as static files.

    Crawls from the configured entry routes, renders every reachable route
    through *render*, writes the output tree and the fallback shell, and
    reports the result.  The output is deployable to any static host.

    Args:
        root: Path to the project root directory.
        render: Render collaborator.  Defaults to ``config.renderer``.
        collector: Optional observability collector.
        quiet: Suppress the banner and report.
        verbose: Print one line per resolved route.
        **kwargs: Override ExportConfig fields.

    Returns:
        The build outcome.  A configuration problem yields a failed outcome
        instead of an exception.

    """
    from pawprint.banner import print_banner, print_report
    from pawprint.export.static import StaticExporter

    t0 = time.perf_counter()
    try:
        config = load_config(Path(root), **kwargs)
        renderer = _resolve_renderer(config, render)
    except ConfigError as exc:
        outcome = finalize(
            [], [], [BuildIssue(kind="config", message=str(exc))],
            output_dir=Path(root).resolve(),
        )
        if not quiet:
            print_report(outcome)
        return outcome

    if collector is None:
        collector = BuildCollector(EventLog())

    if not quiet:
        print_banner(config, load_ms=(time.perf_counter() - t0) * 1000)

    exporter = StaticExporter(renderer, config, collector=collector, verbose=verbose)
    outcome = exporter.export()

    if not quiet:
        print_report(outcome)
    return outcome
