"""Startup banner — mode-aware status output.

Prints a short banner with the source and output trees, document count and
server URL.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inkwell.config import InkwellConfig


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

_CODES: dict[str, str] = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
}


def style(name: str, text: str) -> str:
    """Wrap *text* in the named ANSI style when the terminal supports color."""
    if not _COLOR:
        return text
    return f"{_CODES[name]}{text}{_CODES['reset']}"


# ---------------------------------------------------------------------------
# Mode badges
# ---------------------------------------------------------------------------

_MODE_STYLES: dict[str, str] = {
    "md": "yellow",
    "watch": "magenta",
    "webserver": "cyan",
    "default": "green",
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    return style(_MODE_STYLES.get(mode, "dim"), f"[{mode}]")


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{style('bold', style('cyan', url))}\033]8;;\033\\"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: InkwellConfig,
    mode: str,
    *,
    document_count: int | None = None,
    serving: bool = False,
    watching: bool = False,
    warnings: list[str] | None = None,
) -> None:
    """Print the inkwell startup banner to stderr.

    Args:
        config: Resolved InkwellConfig.
        mode: Task name (``md``, ``watch``, ``webserver``, ``default``).
        document_count: Number of source documents found, if known.
        serving: Whether the development server is about to start.
        watching: Whether the source watcher is active.
        warnings: Optional list of warning messages to display.

    """
    from inkwell import __version__
    from inkwell.reactive.livereload import RELOAD_ENDPOINT

    dash = style("dim", "├─")
    lines: list[str] = [
        "",
        f"  {style('bold', 'inkwell')} {style('dim', f'v{__version__}')}  {_mode_badge(mode)}",
        f"  {style('dim', '─' * 43)}",
        f"  {dash} source: {style('dim', str(config.source_path))}",
        f"  {dash} output: {style('dim', str(config.output_path))}",
    ]

    if document_count is not None:
        label = "document" if document_count == 1 else "documents"
        lines.append(f"  {dash} {document_count} {label} ({config.extension})")

    if serving and config.livereload:
        lines.append(
            f"  {dash} {style('green', 'live')} — SSE on {style('dim', RELOAD_ENDPOINT)}"
        )

    if serving:
        lines.append("")
        lines.append(f"  {_clickable_url(config.url)}")

    if watching:
        lines.append("")
        lines.append(f"  {style('dim', 'Watching for changes...')}")

    if warnings:
        lines.append("")
        lines.extend(f"  {style('yellow', '!')} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
