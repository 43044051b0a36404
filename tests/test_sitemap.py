"""Tests for pawprint.export.sitemap — sitemap.xml generation."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint._errors import CollisionError
from pawprint.export.manifest import ExportedFile
from pawprint.export.mapper import OutputRegistry
from pawprint.export.sitemap import generate_sitemap, write_sitemap


def _page(source: str, name: str, source_type: str = "page") -> ExportedFile:
    return ExportedFile(
        source_path=source,
        output_path=Path("/out") / name,
        source_type=source_type,  # type: ignore[arg-type]
        size_bytes=100,
        duration_ms=1.0,
    )


class TestGenerateSitemap:
    """generate_sitemap — XML string generation."""

    def test_valid_xml_structure(self) -> None:
        xml = generate_sitemap([_page("/", "index.html")], "https://example.com")
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml
        assert "<loc>https://example.com/</loc>" in xml

    def test_order_follows_pages(self) -> None:
        pages = [_page("/", "index.html"), _page("/z", "z/index.html"), _page("/a", "a/index.html")]
        xml = generate_sitemap(pages, "https://example.com/")
        assert xml.index("/z</loc>") < xml.index("/a</loc>")

    def test_no_timestamps(self) -> None:
        xml = generate_sitemap([_page("/", "index.html")], "https://example.com")
        assert "lastmod" not in xml

    def test_skips_non_pages_and_non_html(self) -> None:
        pages = [
            _page("/", "index.html"),
            _page("/feed.xml", "feed.xml"),
            _page("fallback", "200.html", "fallback"),
            _page("/logo.png", "logo.png", "asset"),
        ]
        xml = generate_sitemap(pages, "https://example.com")
        assert xml.count("<url>") == 1

    def test_special_characters_escaped(self) -> None:
        xml = generate_sitemap([_page("/a&b", "a&b/index.html")], "https://example.com")
        assert "/a&amp;b</loc>" in xml


class TestWriteSitemap:
    def test_writes_file(self, tmp_path: Path) -> None:
        exported = write_sitemap([_page("/", "index.html")], "https://example.com", tmp_path)
        assert exported is not None
        assert exported.source_type == "sitemap"
        assert (tmp_path / "sitemap.xml").read_bytes().startswith(b"<?xml")

    def test_skipped_without_base_url(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert write_sitemap([_page("/", "index.html")], "", tmp_path) is None
        assert not (tmp_path / "sitemap.xml").exists()
        assert "Sitemap skipped" in capsys.readouterr().err

    def test_collides_with_route(self, tmp_path: Path) -> None:
        registry = OutputRegistry()
        registry.claim("sitemap.xml", "/sitemap.xml")
        with pytest.raises(CollisionError):
            write_sitemap([], "https://example.com", tmp_path, registry)
