"""Load ExportConfig from pawprint.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import sys
from pathlib import Path

from pawprint.config import ExportConfig

_KNOWN_KEYS = frozenset({
    "output", "entries", "fallback", "shell", "client_entry", "concurrency",
    "crawl", "max_retries", "render_timeout", "trailing_slash", "extension",
    "case_insensitive", "on_dynamic", "on_render_error", "origin",
    "assets_dir", "base_url", "precompress", "renderer",
})


def load_config(root: Path, **overrides: object) -> ExportConfig:
    """Load ExportConfig from root, optionally merging pawprint.yaml.

    Looks for pawprint.yaml, pawprint.yml, or pawprint.toml in root. If found,
    loads and merges with overrides. Overrides take precedence, ``None``
    included: ``fallback=None`` disables the fallback even when the file
    names one.
    """
    root = Path(root)
    file_config = _read_pawprint_config(root)
    merged = {**file_config, **overrides}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "shell" in merged and merged["shell"] is not None:
        merged["shell"] = Path(str(merged["shell"]))
    if "entries" in merged and not isinstance(merged["entries"], tuple):
        entries = merged["entries"]
        merged["entries"] = (entries,) if isinstance(entries, str) else tuple(entries or ())
    return ExportConfig(root=root, **merged)
def _read_pawprint_config(root: Path) -> dict[str, object]:
    """Read pawprint config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pawprint.yaml", "pawprint.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pawprint.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_pawprint_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError:
        return {}
    return _flatten_pawprint_section(data, path)


def _flatten_pawprint_section(data: dict[str, object], path: Path) -> dict[str, object]:
    """Extract pawprint.* keys into top-level config.

    Keys pawprint does not know are dropped with a note on stderr.  When a
    ``pawprint`` section exists, other top-level keys may belong to other
    tools and are dropped quietly.
    """
    result: dict[str, object] = {}
    unknown: list[str] = []
    section = data.get("pawprint")
    for k, v in data.items():
        if k == "pawprint":
            continue
        if k in _KNOWN_KEYS:
            result[k] = v
        elif not isinstance(section, dict):
            unknown.append(k)
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
            else:
                unknown.append(k)
    if unknown:
        print(
            f"  Ignoring unknown config keys in {path.name}: {', '.join(sorted(unknown))}",
            file=sys.stderr,
        )
    return result
