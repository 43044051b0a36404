"""Pawprint CLI — pawprint build.

Entry point for the ``pawprint`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pawprint CLI."""
    parser = argparse.ArgumentParser(
        prog="pawprint",
        description="Crawl an application and export it as static files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pawprint build
    build_parser = subparsers.add_parser(
        "build",
        help="Export the application as static files",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument(
        "--renderer", default=None, help="Render collaborator, e.g. app.prerender:render",
    )
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--entry",
        dest="entries",
        action="append",
        default=None,
        help="Seed route (repeatable; default '/')",
    )
    build_parser.add_argument(
        "--no-entries",
        action="store_true",
        help="Start with no entry routes (fallback-only build)",
    )
    build_parser.add_argument("--fallback", default=None, help="Fallback document name")
    build_parser.add_argument(
        "--no-fallback", action="store_true", help="Do not write a fallback document",
    )
    build_parser.add_argument(
        "--concurrency", type=int, default=None, help="Maximum renders in flight",
    )
    build_parser.add_argument(
        "--no-crawl", action="store_true", help="Render entries only; do not follow links",
    )
    build_parser.add_argument(
        "--trailing-slash",
        choices=("always", "never", "ignore"),
        default=None,
        help="How clean URLs map to files",
    )
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL for sitemap generation",
    )
    build_parser.add_argument(
        "--precompress", action="store_true", help="Write .gz siblings for text files",
    )
    build_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on routes that need a server or fail to render",
    )
    build_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Print every resolved route",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pawprint import __version__

    return __version__


def _build_overrides(args: argparse.Namespace) -> dict[str, object]:
    """Translate parsed build flags into ExportConfig overrides.

    Flags left unset are omitted so file configuration still applies.
    """
    overrides: dict[str, object] = {
        key: value
        for key, value in (
            ("renderer", args.renderer),
            ("output", args.output),
            ("fallback", args.fallback),
            ("concurrency", args.concurrency),
            ("trailing_slash", args.trailing_slash),
            ("base_url", args.base_url),
        )
        if value is not None
    }
    if args.no_entries:
        overrides["entries"] = ()
    elif args.entries:
        overrides["entries"] = tuple(args.entries)
    if args.no_fallback:
        overrides["fallback"] = ""
    if args.no_crawl:
        overrides["crawl"] = False
    if args.precompress:
        overrides["precompress"] = True
    if args.strict:
        overrides["on_dynamic"] = "fatal"
        overrides["on_render_error"] = "fatal"
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pawprint.app import build

    if args.command == "build":
        outcome = build(root=args.root, verbose=args.verbose, **_build_overrides(args))
        sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
