"""Route identity — normalisation and per-route crawl records.

A route's identity is its normalised path:

    /about?tab=2#team   -> /about
    //docs//intro/      -> /docs/intro/
    /docs/./a/../b      -> /docs/b
    /café               -> /caf%C3%A9

Query strings and fragments never distinguish two routes.  Segments are
percent-encoded exactly once, so ``/café`` and ``/caf%C3%A9`` are the same
route and ``%2F`` stays an encoded character rather than a separator.  The
trailing slash does distinguish routes: ``/about`` and ``/about/`` are
distinct, which is what lets the output mapper detect when both land on the
same file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote_to_bytes

if TYPE_CHECKING:
    from pawprint._types import OutcomeKind, RoutePath, RouteStatus

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# RFC 3986 pchar minus unreserved characters, which quote() never escapes
_SEGMENT_SAFE = "!$&'()*+,;=:@"


def normalize_route(path: str) -> RoutePath:
    """Return the canonical identity of a route path.

    Raises:
        ValueError: If *path* is not an absolute path (e.g., ``about`` or a
            full URL with a scheme).

    """
    raw = path.split("#", 1)[0].split("?", 1)[0]
    if not raw.startswith("/"):
        if _SCHEME_RE.match(raw):
            msg = f"Route must be a path, not a URL: {path!r}"
        else:
            msg = f"Route must start with '/': {path!r}"
        raise ValueError(msg)

    segments: list[str] = []
    trailing = raw.endswith("/")
    for segment in raw.split("/"):
        if not segment:
            continue
        encoded = quote(unquote_to_bytes(segment), safe=_SEGMENT_SAFE)
        if encoded in (".", ".."):
            if encoded == ".." and segments:
                segments.pop()
            trailing = True
            continue
        segments.append(encoded)
        trailing = raw.endswith("/")

    if not segments:
        return "/"
    clean = "/" + "/".join(segments)
    return clean + "/" if trailing else clean


def route_segments(path: RoutePath) -> tuple[str, ...]:
    """Split a normalised route into its path segments."""
    return tuple(s for s in path.split("/") if s)


@dataclass(slots=True)
class RouteRecord:
    """A route known to the crawl, kept for the final report.

    Mutated only by the crawl scheduler.

    Attributes:
        path: Normalised route identity.
        index: Position in first-discovery order.
        parent: Route whose page linked here, or *None* for entry routes.
        status: Lifecycle state.
        outcome: Classification of the render, once resolved.
        attempts: Render attempts made (retries included).
        output_path: Output-relative file written for this route, if any.
        redirect_target: Where the route redirected to, if it did.
        reason: Failure or skip reason, if any.

    """

    path: RoutePath
    index: int
    parent: RoutePath | None = None
    status: RouteStatus = "pending"
    outcome: OutcomeKind | None = None
    attempts: int = 0
    output_path: str | None = None
    redirect_target: str | None = None
    reason: str | None = None
