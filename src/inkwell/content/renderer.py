"""Markdown renderer — converts the source tree to HTML files.

A render pass enumerates every source document under the source root
(``**/*.md`` by default), converts each with Patitas using a fixed set of
options, and writes one HTML file per document into the output tree,
mirroring relative paths.  Prior output is overwritten; output for deleted
sources is left in place.

Every document yields a ``RenderResult``.  Conversion failures are input
errors, read/write failures are I/O errors, and neither stops the pass.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from patitas import Markdown
from patitas.nodes import LineBreak, SoftBreak
from patitas.sanitize import sanitize, strip_html
from patitas.visitor import transform

from inkwell._errors import ConfigError, RenderError
from inkwell.content.results import BuildReport, RenderResult, RenderStatus

if TYPE_CHECKING:
    from patitas.nodes import Document, Node

    from inkwell.config import InkwellConfig

OUTPUT_SUFFIX = ".html"

_GFM_PLUGINS = ("table", "strikethrough", "task_lists", "autolinks")


@dataclass(frozen=True, slots=True)
class RendererOptions:
    """Markdown conversion options.

    Attributes:
        gfm: GitHub-flavored extensions (tables, strikethrough, task lists,
            bare URL autolinks).
        tables: Table syntax, independently of ``gfm``.
        breaks: Single newlines inside paragraphs become ``<br>``.
        pedantic: Strict original-Markdown parsing (unsupported).
        smart_lists: Smart list detection; CommonMark list rules already apply it.
        smartypants: Typographic punctuation substitution (unsupported).
        sanitize: Drop raw HTML blocks and inline HTML from the parsed document.

    """

    gfm: bool = True
    tables: bool = True
    breaks: bool = False
    pedantic: bool = False
    smart_lists: bool = True
    smartypants: bool = False
    sanitize: bool = True

    @property
    def plugins(self) -> tuple[str, ...]:
        """Patitas plugin names enabled by these options."""
        plugins: list[str] = []
        if self.gfm:
            plugins.extend(_GFM_PLUGINS)
        elif self.tables:
            plugins.append("table")
        return tuple(plugins)


class MarkdownRenderer:
    """Converts Markdown text to an HTML fragment.

    Args:
        options: Conversion options; defaults match the build configuration.

    Raises:
        ConfigError: If an option has no Patitas counterpart.

    """

    def __init__(self, options: RendererOptions | None = None) -> None:
        self._options = options or RendererOptions()
        if self._options.pedantic:
            msg = "pedantic mode is not supported by the Markdown parser"
            raise ConfigError(msg)
        if self._options.smartypants:
            msg = "smartypants substitution is not supported by the Markdown parser"
            raise ConfigError(msg)
        self._md = Markdown(plugins=list(self._options.plugins))

    @property
    def options(self) -> RendererOptions:
        return self._options

    def render(self, source: str) -> str:
        """Convert Markdown source to HTML.

        The source is parsed once; sanitizing and hard breaks are applied to
        the document tree before it is rendered.

        Raises:
            RenderError: If the parser fails on the source.

        """
        try:
            doc: Document = self._md.parse(source)
            if self._options.sanitize:
                doc = sanitize(doc, policy=strip_html)
            if self._options.breaks:
                doc = transform(doc, hard_break)
            return self._md.render(doc, source=source)
        except Exception as exc:
            msg = f"{type(exc).__name__}: {exc}"
            raise RenderError(msg) from exc


def hard_break(node: Node) -> Node:
    """Render a soft line break as ``<br />``."""
    if isinstance(node, SoftBreak):
        return LineBreak(location=node.location)
    return node


# ---------------------------------------------------------------------------
# Source discovery
# ---------------------------------------------------------------------------


def discover_sources(
    source_root: Path,
    extension: str = ".md",
    exclude: Path | None = None,
) -> list[Path]:
    """Recursively enumerate source documents under ``source_root``.

    Matches ``**/*<extension>``, skipping anything under ``exclude`` (the
    output tree when it lives inside the source tree).  Sorted for a
    deterministic render order.

    """
    found: list[Path] = []
    for path in source_root.rglob(f"*{extension}"):
        if not path.is_file():
            continue
        if exclude is not None and path.is_relative_to(exclude):
            continue
        found.append(path)
    return sorted(found)


def output_path_for(source: Path, source_root: Path, output_root: Path) -> Path:
    """Mirror a source document's relative path into the output tree."""
    rel = source.relative_to(source_root)
    return (output_root / rel).with_suffix(OUTPUT_SUFFIX)


# ---------------------------------------------------------------------------
# Render passes
# ---------------------------------------------------------------------------


def render_document(
    renderer: MarkdownRenderer,
    source: Path,
    source_root: Path,
    output_root: Path,
) -> RenderResult:
    """Render one source document and write its HTML file."""
    t0 = time.perf_counter()
    output = output_path_for(source, source_root, output_root)

    def _result(status: RenderStatus, message: str = "") -> RenderResult:
        return RenderResult(
            source=source,
            output=output,
            status=status,
            message=message,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )

    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        return _result(RenderStatus.INPUT_ERROR, f"not valid UTF-8: {exc}")
    except OSError as exc:
        return _result(RenderStatus.IO_ERROR, f"read failed: {exc}")

    try:
        html = renderer.render(text)
    except RenderError as exc:
        return _result(RenderStatus.INPUT_ERROR, str(exc))

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
    except OSError as exc:
        return _result(RenderStatus.IO_ERROR, f"write failed: {exc}")

    return _result(RenderStatus.OK)


def render_all(
    config: InkwellConfig,
    renderer: MarkdownRenderer | None = None,
) -> BuildReport:
    """Run one full render pass over the configured source tree.

    Raises:
        ConfigError: If the renderer options are unsupported.

    """
    t0 = time.perf_counter()
    source_root = config.source_path
    output_root = config.output_path

    def _unreadable(message: str) -> BuildReport:
        failure = RenderResult(
            source=source_root,
            output=None,
            status=RenderStatus.IO_ERROR,
            message=message,
        )
        return BuildReport(results=(failure,), duration_ms=(time.perf_counter() - t0) * 1000)

    if not source_root.is_dir():
        return _unreadable("source directory does not exist")

    if renderer is None:
        renderer = MarkdownRenderer(config.renderer_options)

    try:
        sources = discover_sources(source_root, config.extension, exclude=output_root)
    except OSError as exc:
        return _unreadable(f"cannot list source directory: {exc}")

    results = tuple(
        render_document(renderer, source, source_root, output_root) for source in sources
    )
    return BuildReport(results=results, duration_ms=(time.perf_counter() - t0) * 1000)
