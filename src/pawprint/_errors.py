"""Pawprint error hierarchy.

All pawprint-specific errors inherit from PawprintError for easy catching.
"""


class PawprintError(Exception):
    """Base error for all pawprint operations."""


class ConfigError(PawprintError):
    """Invalid or missing configuration."""


class RenderError(PawprintError):
    """A route could not be rendered by the render collaborator."""


class TransientRenderError(RenderError):
    """A render failure worth retrying (I/O hiccup, upstream timeout)."""


class LinkExtractionError(PawprintError):
    """Rendered content could not be parsed for links."""


class ExportError(PawprintError):
    """Error during static export."""


class FallbackError(ExportError):
    """The fallback shell document could not be produced."""


class CollisionError(ExportError):
    """Two distinct outputs map to the same destination file.

    Attributes:
        destination: Output-relative path both sides map to.
        first: Logical route (or label) that claimed the path first.
        second: Logical route (or label) that tried to claim it again.

    """

    def __init__(self, destination: str, first: str, second: str) -> None:
        self.destination = destination
        self.first = first
        self.second = second
        super().__init__(
            f"Output collision at {destination!r}: "
            f"{first!r} and {second!r} map to the same file"
        )
