"""Pawprint — crawl an application and export it as static files.

Discovers every route reachable from a set of entry routes, renders each one
through your render function, writes the results as a file tree any static
host can serve, and adds a single SPA fallback document for everything that
could not be prerendered.

Quick start::

    import pawprint

    async def render(route):
        return pawprint.RenderResponse(status=200, body=my_app.render(route))

    outcome = pawprint.build("my-app/", render=render, fallback="200.html")
    raise SystemExit(outcome.exit_code)

Pieces::

    pawprint.build(...)             # Load config, export, report
    pawprint.StaticExporter(...)    # The export pipeline on its own
    pawprint.ExportConfig(...)      # Frozen configuration

"""

__version__ = "0.1.0-dev"
__all__ = [
    "ExportConfig",
    "RenderResponse",
    "StaticExporter",
    "__version__",
    "build",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pawprint`` fast; the crawl and export machinery (and
    BeautifulSoup) load on first use.
    """
    if name == "ExportConfig":
        from pawprint.config import ExportConfig

        return ExportConfig

    if name == "RenderResponse":
        from pawprint.render.resolver import RenderResponse

        return RenderResponse

    if name == "StaticExporter":
        from pawprint.export.static import StaticExporter

        return StaticExporter

    if name == "build":
        from pawprint.app import build

        return build

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
