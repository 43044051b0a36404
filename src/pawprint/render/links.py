"""Link extraction — find same-origin routes referenced by a rendered page.

Feeds route discovery.  Only navigational references count:

    <a href>, <area href>, <link rel="alternate|next|prev" href>

A ``<base href>`` in the document changes how relative links resolve.
References to other origins, non-HTTP schemes, fragment-only links, downloads,
``rel="external"`` links and static resources (images, stylesheets, fonts...)
are dropped, as is the page's own route.
"""

from __future__ import annotations

from posixpath import splitext
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, ParserRejectedMarkup

from pawprint._errors import LinkExtractionError
from pawprint.routes.path import normalize_route

if TYPE_CHECKING:
    from pawprint._types import RoutePath

_FOLLOWED_LINK_RELS = frozenset({"alternate", "next", "prev"})

_SKIPPED_SCHEMES = ("mailto:", "tel:", "javascript:", "data:", "blob:", "sms:")

# Extensions of resources that are never routes
_RESOURCE_EXTS = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".avif", ".svg", ".ico", ".bmp",
    ".css", ".js", ".mjs", ".map", ".wasm",
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    ".mp3", ".mp4", ".webm", ".ogg", ".wav", ".mov",
    ".pdf", ".zip", ".gz", ".tar", ".tgz", ".dmg", ".exe",
})

# Extensions of documents that may carry further links
_HTML_EXTS = frozenset({"", ".html", ".htm"})


class LinkExtractor:
    """Extract same-origin route links from rendered documents.

    Args:
        origin: Origin the application lives on (``scheme://host[:port]``).
            Absolute links to this origin are treated as internal.

    """

    __slots__ = ("_origin", "_origin_key")

    def __init__(self, origin: str = "http://localhost") -> None:
        self._origin = origin.rstrip("/")
        self._origin_key = _origin_key(self._origin)

    @property
    def origin(self) -> str:
        return self._origin

    def extract_links(
        self, route: RoutePath, content: bytes | str,
    ) -> tuple[RoutePath, ...]:
        """Return internal routes referenced by *content*, in document order.

        Non-HTML documents (e.g. a ``/feed.xml`` route) yield no links.

        Raises:
            LinkExtractionError: If the content cannot be decoded or parsed.

        """
        if not is_html_route(route):
            return ()

        if isinstance(content, bytes):
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                msg = f"Cannot decode {route!r} as UTF-8: {exc}"
                raise LinkExtractionError(msg) from exc
        else:
            text = content

        try:
            soup = BeautifulSoup(text, "html.parser")
        except (ParserRejectedMarkup, AssertionError) as exc:
            msg = f"Cannot parse {route!r}: {exc}"
            raise LinkExtractionError(msg) from exc

        page_url = self._origin + route
        base_tag = soup.find("base", href=True)
        base_url = urljoin(page_url, str(base_tag["href"])) if base_tag else page_url

        found: list[RoutePath] = []
        seen: set[RoutePath] = {route}

        for href in self._candidate_hrefs(soup):
            target = self.to_route(href, base_url)
            if target is None or target in seen:
                continue
            seen.add(target)
            found.append(target)

        return tuple(found)

    def to_route(self, href: str, base_url: str | None = None) -> RoutePath | None:
        """Resolve *href* to an internal route, or *None* if it is not one."""
        href = href.strip()
        if not href or href.startswith("#"):
            return None
        if href.lower().startswith(_SKIPPED_SCHEMES):
            return None

        try:
            absolute = urljoin(base_url or self._origin + "/", href)
            parts = urlsplit(absolute)
            if parts.scheme not in ("http", "https"):
                return None
            if _origin_key(f"{parts.scheme}://{parts.netloc}") != self._origin_key:
                return None
        except ValueError:
            # Malformed netloc or port
            return None

        path = parts.path or "/"
        _, ext = splitext(path.rstrip("/").rsplit("/", 1)[-1])
        if ext.lower() in _RESOURCE_EXTS and not path.endswith("/"):
            return None

        try:
            return normalize_route(path)
        except ValueError:
            return None

    @staticmethod
    def _candidate_hrefs(soup: BeautifulSoup) -> list[str]:
        hrefs: list[str] = []
        for tag in soup.find_all(["a", "area", "link"], href=True):
            rel = {r.lower() for r in (tag.get("rel") or [])}
            if tag.name == "link":
                if not rel & _FOLLOWED_LINK_RELS:
                    continue
            elif "external" in rel or tag.has_attr("download"):
                continue
            hrefs.append(str(tag["href"]))
        return hrefs


def is_html_route(route: RoutePath) -> bool:
    """True if *route* names an HTML document (or a clean URL)."""
    if route.endswith("/"):
        return True
    _, ext = splitext(route.rsplit("/", 1)[-1])
    return ext.lower() in _HTML_EXTS


def _origin_key(origin: str) -> tuple[str, str]:
    parts = urlsplit(origin)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    port = parts.port
    default = {"http": 80, "https": 443}.get(scheme)
    netloc = host if port in (None, default) else f"{host}:{port}"
    return scheme, netloc
