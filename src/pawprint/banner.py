"""Build banner and report — mode-aware status output.

Prints a branded header before the build and a summary after it.  Detects
``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.config import ExportConfig
    from pawprint.export.manifest import BuildOutcome


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_ORANGE = "\033[38;5;214m" if _COLOR else ""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(config: ExportConfig, *, load_ms: float = 0.0) -> None:
    """Print the pawprint build banner to stderr."""
    from pawprint import __version__

    paw = "\U0001F43E"  # paw prints
    header = f"  {_ORANGE}{_BOLD}{paw}{_RESET}  Pawprint {_DIM}v{__version__}{_RESET}"

    entries = ", ".join(config.entries) if config.entries else "(none)"
    fallback = config.fallback or f"{_YELLOW}disabled{_RESET}"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    crawl = "" if config.crawl else f" {_DIM}(crawl off){_RESET}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} entries: {entries}",
        f"  {_DIM}├─{_RESET} fallback: {fallback}",
        f"  {_DIM}├─{_RESET} concurrency: {config.concurrency}{crawl}",
        f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}{timing}",
        "",
    ]
    print("\n".join(lines), file=sys.stderr)


def print_report(outcome: BuildOutcome) -> None:
    """Print the build summary, warnings and errors to stderr."""
    lines = ["", "─" * 41]

    lines.append(f"  Exported {_plural(outcome.total_pages, 'page')}")
    if outcome.total_assets > 0:
        lines.append(f"  Copied {_plural(outcome.total_assets, 'asset')}")
    skipped = sum(1 for r in outcome.routes if r.status == "skipped")
    if skipped:
        lines.append(f"  Left {_plural(skipped, 'route')} to the fallback")

    if outcome.warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in outcome.warnings)
    if outcome.errors:
        lines.append("")
        lines.extend(f"  {_RED}✗{_RESET} {e}" for e in outcome.errors)

    lines.append("")
    lines.append(f"  Output: {outcome.output_dir}")
    if outcome.success:
        lines.append(f"  {_GREEN}Done{_RESET} in {outcome.duration_ms:.0f}ms")
    else:
        lines.append(
            f"  {_RED}{_BOLD}Build failed{_RESET} "
            f"with {_plural(len(outcome.errors), 'error')}"
        )

    print("\n".join(lines), file=sys.stderr)
