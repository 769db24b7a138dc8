"""Inkwell — Markdown builds with a live-reloading development server.

Renders a tree of Markdown documents to HTML, watches the tree for changes,
and serves the output over HTTP, telling connected browsers to reload
whenever the output changes.

Quick start::

    import inkwell

    inkwell.run()                       # render, watch and serve
    inkwell.run("md")                   # one render pass
    inkwell.run("webserver", port=9000) # serve builds/markdown/output

Default layout::

    builds/markdown/**/*.md   ->   builds/markdown/output/**/*.html

"""

__version__ = "0.1.0"
__all__ = [
    "InkwellConfig",
    "__version__",
    "load_config",
    "render_all",
    "run",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import inkwell`` fast; chirp and patitas load only when used.
    """
    if name == "InkwellConfig":
        from inkwell.config import InkwellConfig

        return InkwellConfig

    if name == "load_config":
        from inkwell.config_loader import load_config

        return load_config

    if name == "render_all":
        from inkwell.content.renderer import render_all

        return render_all

    if name == "run":
        from inkwell.tasks import run

        return run

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
