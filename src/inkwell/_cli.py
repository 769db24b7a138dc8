"""Inkwell CLI — inkwell md / watch / webserver / default.

Entry point for the ``inkwell`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from inkwell._errors import InkwellError
from inkwell.config_loader import load_config
from inkwell.tasks import DEFAULT_TASK, build_tasks, run_task


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the inkwell CLI."""
    parser = argparse.ArgumentParser(
        prog="inkwell",
        description="Render Markdown to HTML, watch for changes, serve with live reload.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    md_parser = subparsers.add_parser("md", help="Render every Markdown document once")
    _add_common_args(md_parser)

    watch_parser = subparsers.add_parser("watch", help="Re-render on every source change")
    _add_common_args(watch_parser)

    server_parser = subparsers.add_parser(
        "webserver", help="Serve the output directory with live reload",
    )
    _add_common_args(server_parser)
    _add_server_args(server_parser)

    default_parser = subparsers.add_parser(
        DEFAULT_TASK, help="Render, watch and serve together (the default)",
    )
    _add_common_args(default_parser)
    _add_server_args(default_parser)

    return parser


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--source", dest="source_dir", default=None, help="Source directory")
    parser.add_argument("--output", dest="output_dir", default=None, help="Output directory")


def _add_server_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Bind port")
    parser.add_argument(
        "--no-livereload", dest="livereload", action="store_false", default=None,
        help="Disable the live-reload channel",
    )
    parser.add_argument(
        "--no-open", dest="open_browser", action="store_false", default=None,
        help="Do not open a browser on start",
    )


def _get_version() -> str:
    """Get the package version."""
    from inkwell import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    keys = ("source_dir", "output_dir", "host", "port", "livereload", "open_browser")
    return {k: getattr(args, k) for k in keys if getattr(args, k, None) is not None}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    command = args.command or DEFAULT_TASK
    root = getattr(args, "root", ".")

    try:
        config = load_config(Path(root), **_overrides(args))
        status = run_task(command, config, build_tasks())
    except InkwellError as exc:
        print(f"inkwell: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        status = 0

    sys.exit(status)


if __name__ == "__main__":
    main()
