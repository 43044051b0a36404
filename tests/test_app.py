"""Tests for pawprint.app — the public build() entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

import pawprint
from pawprint.app import build
from pawprint.observability import BuildCollector, EventLog

from .conftest import page, read_tree


async def _render(route: str) -> pawprint.RenderResponse:
    if route == "/":
        return pawprint.RenderResponse(body=page("/about"))
    return pawprint.RenderResponse(body=f"<h1>{route}</h1>")


class TestBuild:
    """build() — load config, export, report."""

    def test_explicit_render(self, tmp_path: Path) -> None:
        outcome = build(tmp_path, render=_render, quiet=True, assets_dir=None)

        assert outcome.success
        assert sorted(read_tree(tmp_path / "build")) == [
            "200.html", "about/index.html", "index.html",
        ]

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "pawprint.yaml").write_text("output: public\nfallback: 404.html\n")
        outcome = build(tmp_path, render=_render, quiet=True, output=Path("dist"))

        assert outcome.success
        assert (tmp_path / "dist" / "404.html").exists()
        assert not (tmp_path / "public").exists()

    def test_none_override_disables_fallback(self, tmp_path: Path) -> None:
        (tmp_path / "pawprint.yaml").write_text("fallback: 404.html\n")
        outcome = build(tmp_path, render=_render, quiet=True, fallback=None)

        assert outcome.success
        assert sorted(read_tree(tmp_path / "build")) == ["about/index.html", "index.html"]

    def test_renderer_from_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "prerender.py").write_text(
            "def render(route):\n"
            "    return {'status': 200, 'body': '<p>' + route + '</p>'}\n"
        )
        (tmp_path / "pawprint.yaml").write_text("renderer: prerender.py:render\n")

        outcome = build(tmp_path, quiet=True)
        assert outcome.success
        assert (tmp_path / "build" / "index.html").read_text() == "<p>/</p>"

    def test_missing_renderer_is_failed_outcome(self, tmp_path: Path) -> None:
        outcome = build(tmp_path, quiet=True)

        assert not outcome.success
        assert [e.kind for e in outcome.errors] == ["config"]
        assert "renderer" in outcome.errors[0].message
        assert not (tmp_path / "build").exists()

    def test_invalid_config_is_failed_outcome(self, tmp_path: Path) -> None:
        outcome = build(tmp_path, render=_render, quiet=True, concurrency=0)
        assert not outcome.success
        assert "concurrency" in outcome.errors[0].message

    def test_collector_passed_through(self, tmp_path: Path) -> None:
        log = EventLog()
        build(tmp_path, render=_render, quiet=True, collector=BuildCollector(log))
        assert len(log.routes()) == 2

    def test_report_printed(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        build(tmp_path, render=_render)
        err = capsys.readouterr().err
        assert "Pawprint" in err
        assert "Exported 2 pages" in err
