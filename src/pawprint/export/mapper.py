"""Output mapping — route paths to output files, with collision detection.

Routes map onto files according to the trailing-slash policy::

    policy    /            /about              /about/
    always    index.html   about/index.html    about/index.html
    never     index.html   about.html          about.html
    ignore    index.html   about.html          about/index.html

A route whose last segment already carries a document extension
(``/feed.xml``, ``/robots.txt``) is written verbatim.

Two distinct outputs landing on the same destination is a ``CollisionError``,
never a silent overwrite.  Destinations compare case-sensitively unless the
mapper is told the host is case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from posixpath import splitext
from typing import TYPE_CHECKING, Literal
from urllib.parse import unquote

from pawprint._errors import CollisionError, ExportError
from pawprint.routes.path import route_segments

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pawprint._types import OutputPath, RoutePath, TrailingSlash

# Extensions that mark a route as naming its own output file
DOCUMENT_EXTS = frozenset({
    ".html", ".htm", ".xml", ".json", ".txt", ".rss", ".atom",
    ".webmanifest", ".csv", ".md",
})


@dataclass(frozen=True, slots=True)
class OutputEntry:
    """One planned output file.

    Attributes:
        route: Logical route (or a label such as ``"fallback"``) that owns
            the file.
        path: Output-relative POSIX path.
        payload: Bytes to write.  *None* when the file is copied from
            elsewhere (static assets).
        source_type: Category of the output.

    """

    route: str
    path: OutputPath
    payload: bytes | None
    source_type: Literal["page", "fallback", "asset", "sitemap"] = "page"


class OutputMapper:
    """Map logical routes to output file paths.

    Args:
        trailing_slash: ``always``, ``never`` or ``ignore``.
        extension: Extension for rendered documents (without the dot).

    """

    __slots__ = ("_extension", "_trailing_slash")

    def __init__(
        self,
        trailing_slash: TrailingSlash = "always",
        extension: str = "html",
    ) -> None:
        self._trailing_slash = trailing_slash
        self._extension = extension

    def file_path(self, route: RoutePath) -> OutputPath:
        """Return the output-relative file path for *route*.

        *route* is a normalised route, so its segments are percent-encoded
        exactly once; they are decoded here for the filesystem path.

        Raises:
            ExportError: If a segment would escape the output directory.

        """
        segments = [unquote(s) for s in route_segments(route)]
        for segment in segments:
            if segment in ("", ".", "..") or "/" in segment or "\\" in segment:
                msg = f"Route {route!r} cannot be mapped to a file safely"
                raise ExportError(msg)

        index = f"index.{self._extension}"
        if not segments:
            return index

        directory_like = route.endswith("/")
        _, ext = splitext(segments[-1])
        if ext.lower() in DOCUMENT_EXTS and not directory_like:
            return "/".join(segments)

        stem = "/".join(segments)
        if self._trailing_slash == "always":
            return f"{stem}/{index}"
        if self._trailing_slash == "never":
            return f"{stem}.{self._extension}"
        # ignore: follow the route as written
        if directory_like:
            return f"{stem}/{index}"
        return f"{stem}.{self._extension}"

    def map_to_file(self, route: RoutePath, content: bytes) -> OutputEntry:
        """Build the OutputEntry for a rendered route."""
        return OutputEntry(
            route=route, path=self.file_path(route), payload=content,
        )


class OutputRegistry:
    """Build-wide record of claimed destination paths.

    The single synchronisation point for parallel writers: a destination
    can be claimed once.

    Args:
        case_insensitive: Treat ``About.html`` and ``about.html`` as the
            same destination.

    """

    __slots__ = ("_case_insensitive", "_claims")

    def __init__(self, *, case_insensitive: bool = False) -> None:
        self._case_insensitive = case_insensitive
        self._claims: dict[str, tuple[str, OutputPath]] = {}

    def _key(self, path: OutputPath) -> str:
        return path.casefold() if self._case_insensitive else path

    def claim(self, path: OutputPath, owner: str) -> None:
        """Claim *path* for *owner*.

        Raises:
            CollisionError: If another owner already holds the path.

        """
        key = self._key(path)
        existing = self._claims.get(key)
        if existing is not None:
            raise CollisionError(path, existing[0], owner)
        self._claims[key] = (owner, path)

    def owner_of(self, path: OutputPath) -> str | None:
        existing = self._claims.get(self._key(path))
        return existing[0] if existing else None

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._key(path) in self._claims

    def __len__(self) -> int:
        return len(self._claims)


def check_collisions(
    entries: Iterable[OutputEntry],
    *,
    case_insensitive: bool = False,
) -> list[CollisionError]:
    """Return one CollisionError per entry whose destination is already taken.

    Entries are checked in the order given; the first owner of a path wins
    and every later claimant is reported against it.
    """
    registry = OutputRegistry(case_insensitive=case_insensitive)
    errors: list[CollisionError] = []
    for entry in entries:
        try:
            registry.claim(entry.path, entry.route)
        except CollisionError as exc:
            errors.append(exc)
    return errors
