"""Tests for pawprint.export.mapper — route-to-file mapping and collisions."""

from __future__ import annotations

import pytest

from pawprint._errors import CollisionError, ExportError
from pawprint.export.mapper import (
    OutputEntry,
    OutputMapper,
    OutputRegistry,
    check_collisions,
)


class TestFilePath:
    """OutputMapper.file_path under each trailing-slash policy."""

    @pytest.mark.parametrize(
        ("route", "expected"),
        [
            ("/", "index.html"),
            ("/about", "about/index.html"),
            ("/about/", "about/index.html"),
            ("/docs/intro/", "docs/intro/index.html"),
        ],
    )
    def test_always(self, route: str, expected: str) -> None:
        assert OutputMapper("always").file_path(route) == expected

    @pytest.mark.parametrize(
        ("route", "expected"),
        [
            ("/", "index.html"),
            ("/about", "about.html"),
            ("/about/", "about.html"),
            ("/docs/intro", "docs/intro.html"),
        ],
    )
    def test_never(self, route: str, expected: str) -> None:
        assert OutputMapper("never").file_path(route) == expected

    @pytest.mark.parametrize(
        ("route", "expected"),
        [
            ("/", "index.html"),
            ("/about", "about.html"),
            ("/about/", "about/index.html"),
        ],
    )
    def test_ignore(self, route: str, expected: str) -> None:
        assert OutputMapper("ignore").file_path(route) == expected

    @pytest.mark.parametrize("policy", ["always", "never", "ignore"])
    def test_filename_routes_verbatim(self, policy: str) -> None:
        mapper = OutputMapper(policy)  # type: ignore[arg-type]
        assert mapper.file_path("/feed.xml") == "feed.xml"
        assert mapper.file_path("/docs/page.html") == "docs/page.html"
        assert mapper.file_path("/robots.txt") == "robots.txt"

    def test_version_like_segment_is_not_a_filename(self) -> None:
        assert OutputMapper().file_path("/v1.2") == "v1.2/index.html"

    def test_custom_extension(self) -> None:
        mapper = OutputMapper("never", extension="htm")
        assert mapper.file_path("/about") == "about.htm"
        assert mapper.file_path("/") == "index.htm"

    def test_percent_decoded(self) -> None:
        assert OutputMapper().file_path("/caf%C3%A9") == "café/index.html"

    @pytest.mark.parametrize("route", ["/a/%2e%2e/b", "/a%2Fb", "/%2e%2e"])
    def test_escaping_segments_rejected(self, route: str) -> None:
        with pytest.raises(ExportError):
            OutputMapper().file_path(route)

    def test_map_to_file(self) -> None:
        entry = OutputMapper().map_to_file("/about", b"<p>about</p>")
        assert entry == OutputEntry(
            route="/about", path="about/index.html", payload=b"<p>about</p>",
        )
        assert entry.source_type == "page"


class TestOutputRegistry:
    """OutputRegistry — first claim wins, second claim collides."""

    def test_claim_and_contains(self) -> None:
        registry = OutputRegistry()
        registry.claim("index.html", "/")
        assert "index.html" in registry
        assert registry.owner_of("index.html") == "/"
        assert len(registry) == 1

    def test_collision(self) -> None:
        registry = OutputRegistry()
        registry.claim("a/index.html", "/a")
        with pytest.raises(CollisionError) as info:
            registry.claim("a/index.html", "/a/")
        assert info.value.first == "/a"
        assert info.value.second == "/a/"
        assert info.value.destination == "a/index.html"

    def test_case_sensitive_by_default(self) -> None:
        registry = OutputRegistry()
        registry.claim("About/index.html", "/About")
        registry.claim("about/index.html", "/about")
        assert len(registry) == 2

    def test_case_insensitive(self) -> None:
        registry = OutputRegistry(case_insensitive=True)
        registry.claim("About/index.html", "/About")
        with pytest.raises(CollisionError):
            registry.claim("about/index.html", "/about")


class TestCheckCollisions:
    """check_collisions — report every clash, not just the first."""

    def test_slash_variants_collide(self) -> None:
        mapper = OutputMapper("always")
        entries = [mapper.map_to_file("/a", b"1"), mapper.map_to_file("/a/", b"2")]
        errors = check_collisions(entries)
        assert len(errors) == 1
        assert (errors[0].first, errors[0].second) == ("/a", "/a/")

    def test_slash_variants_distinct_under_ignore(self) -> None:
        mapper = OutputMapper("ignore")
        entries = [mapper.map_to_file("/a", b"1"), mapper.map_to_file("/a/", b"2")]
        assert check_collisions(entries) == []

    def test_fallback_participates(self) -> None:
        fallback = OutputEntry(route="fallback", path="index.html", payload=b"", source_type="fallback")
        root = OutputMapper().map_to_file("/", b"home")
        errors = check_collisions([fallback, root])
        assert len(errors) == 1
        assert errors[0].first == "fallback"

    def test_multiple_collisions(self) -> None:
        mapper = OutputMapper("never")
        entries = [
            mapper.map_to_file("/x", b""),
            mapper.map_to_file("/x/", b""),
            mapper.map_to_file("/x.html", b""),
        ]
        assert len(check_collisions(entries)) == 2
