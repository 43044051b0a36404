"""Sitemap generation — produce sitemap.xml from exported pages.

Generates a standard sitemap.xml listing every prerendered page.  Requires
``base_url`` to be configured; skips generation when it is empty.  No
``lastmod`` is written so that rebuilding an unchanged site yields a
byte-identical file.
"""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

from pawprint.export.manifest import ExportedFile

if TYPE_CHECKING:
    from pathlib import Path

    from pawprint.export.mapper import OutputRegistry

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SITEMAP_NAME = "sitemap.xml"


def generate_sitemap(
    pages: tuple[ExportedFile, ...] | list[ExportedFile],
    base_url: str,
) -> str:
    """Generate a sitemap.xml string from exported page records.

    Only includes files with ``source_type`` of ``"page"`` that are HTML
    documents; ``/feed.xml``-style routes are left out.  Order follows
    *pages*.

    Args:
        pages: Exported file records from the build pipeline.
        base_url: Site base URL (e.g., ``"https://example.com"``).

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    base = base_url.rstrip("/")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for page in pages:
        if page.source_type != "page":
            continue
        if page.output_path.suffix.lower() not in (".html", ".htm"):
            continue

        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = base + page.source_path

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(
    pages: tuple[ExportedFile, ...] | list[ExportedFile],
    base_url: str,
    output_dir: Path,
    registry: OutputRegistry | None = None,
) -> ExportedFile | None:
    """Write sitemap.xml to the output directory.

    Returns *None* (with a note on stderr) if ``base_url`` is empty.

    Raises:
        CollisionError: If a route or asset already produced ``sitemap.xml``.

    """
    if not base_url:
        print(
            "  Sitemap skipped — set base_url in config to enable",
            file=sys.stderr,
        )
        return None

    if registry is not None:
        registry.claim(SITEMAP_NAME, "sitemap")

    t0 = time.perf_counter()
    xml = generate_sitemap(pages, base_url)

    sitemap_path = output_dir / SITEMAP_NAME
    data = xml.encode("utf-8")
    sitemap_path.write_bytes(data)
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        source_path="/" + SITEMAP_NAME,
        output_path=sitemap_path,
        source_type="sitemap",
        size_bytes=len(data),
        duration_ms=elapsed,
    )
