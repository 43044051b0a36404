"""Shared test fixtures for pawprint."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pawprint.config import ExportConfig
from pawprint.render.resolver import RenderResponse


def page(*links: str, title: str = "Page") -> str:
    """Build a minimal HTML document linking to *links*."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return f"<!DOCTYPE html><html><head><title>{title}</title></head><body>{anchors}</body></html>"


class FakeApp:
    """In-memory render collaborator for tests.

    ``routes`` maps a route path to a ``RenderResponse``, a body string, an
    exception instance (raised), or a callable returning any of those.
    Unknown routes render as 404.  Tracks calls and peak concurrency.
    """

    def __init__(
        self,
        routes: dict[str, Any],
        *,
        delay: float = 0.0,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.routes = routes
        self.delay = delay
        self.delays = delays or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, route: str) -> Any:
        self.calls.append(route)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(route, self.delay))
            value = self.routes.get(route, RenderResponse(status=404))
            if callable(value) and not isinstance(value, RenderResponse):
                value = value()
            if isinstance(value, BaseException):
                raise value
            return value
        finally:
            self.in_flight -= 1


def flaky(failures: int, body: str, exc_factory: Callable[[], BaseException]) -> Callable[[], Any]:
    """Return a callable that raises ``exc_factory()`` *failures* times, then *body*."""
    state = {"left": failures}

    def _render() -> Any:
        if state["left"] > 0:
            state["left"] -= 1
            raise exc_factory()
        return body

    return _render


@pytest.fixture
def fake_app() -> Callable[..., FakeApp]:
    """Factory fixture for FakeApp."""
    return FakeApp


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., ExportConfig]:
    """Factory for an ExportConfig rooted at tmp_path with no assets dir."""

    def _make(**overrides: Any) -> ExportConfig:
        defaults: dict[str, Any] = {
            "root": tmp_path,
            "output": Path("out"),
            "assets_dir": None,
            "render_timeout": 5.0,
        }
        defaults.update(overrides)
        return ExportConfig(**defaults)

    return _make


def read_tree(root: Path) -> dict[str, bytes]:
    """Map output-relative POSIX paths to file contents."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }
