"""Renderer loader — import the render collaborator from a dotted path.

Two spellings are accepted::

    myapp.prerender:render     -> import myapp.prerender, take ``render``
    render.py:render           -> load <root>/render.py as a module

File paths are loaded with ``importlib.util.spec_from_file_location`` without
touching ``sys.path``.
"""

import importlib
import importlib.util
import sys
from pathlib import Path

from pawprint._errors import ConfigError
from pawprint._types import RenderFunc


def load_renderer(spec: str, root: Path) -> RenderFunc:
    """Resolve *spec* (``module:attribute``) to a callable.

    Raises:
        ConfigError: If the module cannot be imported, the attribute is
            missing, or it is not callable.

    """
    module_ref, sep, attr = spec.partition(":")
    if not sep or not module_ref or not attr:
        msg = f"Renderer must look like 'module:function', got {spec!r}"
        raise ConfigError(msg)

    if module_ref.endswith(".py"):
        module = _load_file(root / module_ref)
    else:
        try:
            module = importlib.import_module(module_ref)
        except ImportError as exc:
            msg = f"Cannot import renderer module {module_ref!r}: {exc}"
            raise ConfigError(msg) from exc

    func = module
    for part in attr.split("."):
        func = getattr(func, part, None)
        if func is None:
            msg = f"Renderer module {module_ref!r} has no attribute {attr!r}"
            raise ConfigError(msg)

    if not callable(func):
        msg = f"Renderer {spec!r} is not callable"
        raise ConfigError(msg)
    return func


def _load_file(py_file: Path) -> object:
    """Import a Python file as a module."""
    if not py_file.is_file():
        msg = f"Renderer file not found: {py_file}"
        raise ConfigError(msg)

    module_name = "pawprint_renderer." + py_file.stem
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load renderer file {py_file}"
        raise ConfigError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        # Register in sys.modules so dataclasses and pickling inside the file work
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Failed to load renderer file {py_file}: {exc}"
        raise ConfigError(msg) from exc

    return module
