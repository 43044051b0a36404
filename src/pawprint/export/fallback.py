"""Fallback packaging — the SPA shell served for unmatched paths.

Static hosts can be told to serve one document for every path that has no
file of its own (``200.html`` on Surge, ``404.html`` on GitHub Pages, a
rewrite rule elsewhere).  That document is an empty shell whose only job is
to boot the client-side router, which then resolves the real route.

Shell templates use two placeholders::

    %pawprint.head%   optional, replaced with head markup
    %pawprint.body%   required, replaced with the router bootstrap
"""

from __future__ import annotations

import html
from pathlib import Path, PurePosixPath

from pawprint._errors import FallbackError
from pawprint.export.mapper import OutputEntry

HEAD_PLACEHOLDER = "%pawprint.head%"
BODY_PLACEHOLDER = "%pawprint.body%"

DEFAULT_SHELL = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
%pawprint.head%
</head>
<body>
%pawprint.body%
</body>
</html>
"""


def load_shell(path: Path | None) -> str:
    """Read a shell template from *path*, or return the built-in shell.

    Raises:
        FallbackError: If the template is missing or unreadable.

    """
    if path is None:
        return DEFAULT_SHELL
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Shell template not found: {path}"
        raise FallbackError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read shell template {path}: {exc}"
        raise FallbackError(msg) from exc


def build_fallback(
    shell_template: str,
    fallback_filename: str,
    *,
    client_entry: str = "/app.js",
) -> OutputEntry:
    """Render the fallback shell into an OutputEntry named *fallback_filename*.

    The entry bypasses route-to-file mapping: its name is used verbatim.

    Raises:
        FallbackError: If the name is not a safe relative path or the template
            has no body placeholder.

    """
    name = PurePosixPath(fallback_filename)
    if (
        not fallback_filename
        or name.is_absolute()
        or ".." in name.parts
        or fallback_filename.endswith("/")
    ):
        msg = f"Invalid fallback filename: {fallback_filename!r}"
        raise FallbackError(msg)

    if BODY_PLACEHOLDER not in shell_template:
        msg = f"Shell template has no {BODY_PLACEHOLDER} placeholder"
        raise FallbackError(msg)

    head = '<meta name="pawprint-fallback" content="1">'
    body = (
        '<div id="app"></div>\n'
        "<script>window.__pawprint__ = {fallback: true};</script>\n"
        f"<script type=\"module\" src=\"{html.escape(client_entry)}\"></script>"
    )
    document = shell_template.replace(HEAD_PLACEHOLDER, head).replace(BODY_PLACEHOLDER, body)

    return OutputEntry(
        route="fallback",
        path=str(name),
        payload=document.encode("utf-8"),
        source_type="fallback",
    )
