"""Tests for pawprint.render.loader — renderer lookup from dotted paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint._errors import ConfigError
from pawprint.render.loader import load_renderer


class TestLoadRenderer:
    def test_module_attribute(self, tmp_path: Path) -> None:
        func = load_renderer("posixpath:basename", tmp_path)
        assert func("/a/b") == "b"

    def test_file_attribute(self, tmp_path: Path) -> None:
        (tmp_path / "site_render.py").write_text("def render(route):\n    return route.upper()\n")
        func = load_renderer("site_render.py:render", tmp_path)
        assert func("/x") == "/X"

    def test_nested_attribute(self, tmp_path: Path) -> None:
        (tmp_path / "nested.py").write_text(
            "class App:\n"
            "    @staticmethod\n"
            "    def render(route):\n"
            "        return 'ok'\n"
        )
        assert load_renderer("nested.py:App.render", tmp_path)("/") == "ok"

    @pytest.mark.parametrize("spec", ["render", ":render", "module:", ""])
    def test_malformed_spec(self, spec: str, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="module:function"):
            load_renderer(spec, tmp_path)

    def test_missing_module(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot import"):
            load_renderer("no_such_module_xyz:render", tmp_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_renderer("missing.py:render", tmp_path)

    def test_missing_attribute(self, tmp_path: Path) -> None:
        (tmp_path / "empty_render.py").write_text("")
        with pytest.raises(ConfigError, match="no attribute"):
            load_renderer("empty_render.py:render", tmp_path)

    def test_not_callable(self, tmp_path: Path) -> None:
        (tmp_path / "value_render.py").write_text("render = 42\n")
        with pytest.raises(ConfigError, match="not callable"):
            load_renderer("value_render.py:render", tmp_path)

    def test_broken_file(self, tmp_path: Path) -> None:
        (tmp_path / "broken_render.py").write_text("raise RuntimeError('boom')\n")
        with pytest.raises(ConfigError, match="boom"):
            load_renderer("broken_render.py:render", tmp_path)
