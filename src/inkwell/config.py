"""Inkwell configuration.

InkwellConfig is the central configuration object, frozen after creation.
The defaults reproduce the fixed build layout: Markdown under
``builds/markdown``, HTML written to ``builds/markdown/output``.
"""

from dataclasses import dataclass, field
from pathlib import Path

from inkwell.content.renderer import RendererOptions


@dataclass(frozen=True, slots=True)
class InkwellConfig:
    """Configuration for an inkwell build.

    Attributes:
        root: Project root. Always resolved to an absolute path on construction.
        source_dir: Directory holding the Markdown sources, relative to root.
        output_dir: Directory receiving rendered HTML, relative to the source
            directory unless absolute.
        extension: Source document extension (including the dot).
        host: Bind address for the development server.
        port: Bind port for the development server.
        livereload: Inject the reload script and run the reload channel.
        open_browser: Open the served URL once the server has started.
        debounce_ms: Window in which watchfiles groups filesystem events.
        gfm: Enable GitHub-flavored Markdown extensions.
        tables: Enable table syntax.
        breaks: Treat single newlines inside paragraphs as line breaks.
        pedantic: Strict original-Markdown parsing.
        smart_lists: Automatic smart list detection.
        smartypants: Typographic punctuation substitution.
        sanitize: Drop raw embedded HTML from the rendered output.

    """

    root: Path = field(default_factory=Path.cwd)
    source_dir: str = "builds/markdown"
    output_dir: str = "output"
    extension: str = ".md"
    host: str = "127.0.0.1"
    port: int = 8000
    livereload: bool = True
    open_browser: bool = True
    debounce_ms: int = 50
    gfm: bool = True
    tables: bool = True
    breaks: bool = False
    pedantic: bool = False
    smart_lists: bool = True
    smartypants: bool = False
    sanitize: bool = True

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not self.extension.startswith("."):
            object.__setattr__(self, "extension", f".{self.extension}")

    @property
    def source_path(self) -> Path:
        """Absolute path to the source document tree."""
        return self.root / self.source_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the rendered output tree."""
        output = Path(self.output_dir)
        if output.is_absolute():
            return output
        return self.source_path / output

    @property
    def url(self) -> str:
        """Base URL of the development server."""
        return f"http://{self.host}:{self.port}/"

    @property
    def renderer_options(self) -> RendererOptions:
        """Markdown conversion options carried by this config."""
        return RendererOptions(
            gfm=self.gfm,
            tables=self.tables,
            breaks=self.breaks,
            pedantic=self.pedantic,
            smart_lists=self.smart_lists,
            smartypants=self.smartypants,
            sanitize=self.sanitize,
        )
