"""Content layer — Markdown sources in, HTML files out.

Handles source discovery, Markdown conversion, raw HTML sanitization,
typed render results, and watching the source tree for changes.
"""

from inkwell.content.renderer import (
    MarkdownRenderer,
    RendererOptions,
    discover_sources,
    output_path_for,
    render_all,
    render_document,
)
from inkwell.content.results import BuildReport, RenderResult, RenderStatus
from inkwell.content.watcher import ChangeEvent, SourceWatcher

__all__ = [
    "BuildReport",
    "ChangeEvent",
    "MarkdownRenderer",
    "RenderResult",
    "RenderStatus",
    "RendererOptions",
    "SourceWatcher",
    "discover_sources",
    "output_path_for",
    "render_all",
    "render_document",
]
