"""Named build operations and their handlers.

The four operations are an explicit name-to-handler mapping built at
startup; handlers receive everything they need through the config and
share no module-level state.

    md         one render pass over the source tree
    watch      re-render on every source change, until interrupted
    webserver  serve the output tree with live reload
    default    md, then watch and webserver together on one event loop
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from inkwell._errors import ConfigError, OutputError
from inkwell.banner import print_banner
from inkwell.config_loader import load_config
from inkwell.content.renderer import render_all
from inkwell.observability import EventLog
from inkwell.reporter import Reporter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from inkwell._types import TaskHandler
    from inkwell.config import InkwellConfig

DEFAULT_TASK = "default"


def _reporter(config: InkwellConfig) -> Reporter:
    return Reporter(EventLog(), root=config.root)


def run_md(config: InkwellConfig) -> int:
    """Render every source document once. Returns 1 if any document failed."""
    report = render_all(config)
    _reporter(config).report(report, trigger="md")
    return 0 if report.ok else 1


def run_watch(config: InkwellConfig) -> int:
    """Watch the source tree and re-render on every change."""
    from inkwell.content.renderer import discover_sources

    if not config.source_path.is_dir():
        msg = f"Source directory does not exist: {config.source_path}"
        raise OutputError(msg)

    documents = discover_sources(config.source_path, config.extension, config.output_path)
    print_banner(config, "watch", document_count=len(documents), watching=True)
    asyncio.run(_watch(config, _reporter(config)))
    return 0


async def _watch(config: InkwellConfig, reporter: Reporter) -> None:
    from inkwell.content.watcher import SourceWatcher
    from inkwell.reactive.pipeline import RebuildPipeline

    watcher = SourceWatcher(config)
    pipeline = RebuildPipeline(config, reporter)
    await asyncio.gather(watcher.run(), pipeline.consume(watcher.queue))


def run_webserver(config: InkwellConfig) -> int:
    """Serve the output tree with live reload until interrupted."""
    from inkwell.server import create_app, run_server

    app = create_app(config, event_log=EventLog())
    print_banner(config, "webserver", serving=True)
    run_server(app, config)
    return 0


def run_default(config: InkwellConfig) -> int:
    """Initial render, then the source watcher and the server together."""
    from inkwell.reactive.pipeline import RebuildPipeline
    from inkwell.server import create_app, run_server

    reporter = _reporter(config)
    report = render_all(config)
    reporter.report(report, trigger="md")

    pipeline = RebuildPipeline(config, reporter)
    app = create_app(config, event_log=reporter.event_log, pipeline=pipeline)
    print_banner(
        config, DEFAULT_TASK,
        document_count=len(report.rendered),
        serving=True,
        watching=True,
    )
    run_server(app, config)
    return 0


def build_tasks() -> Mapping[str, TaskHandler]:
    """Return the read-only task name -> handler mapping."""
    return MappingProxyType({
        "md": run_md,
        "watch": run_watch,
        "webserver": run_webserver,
        DEFAULT_TASK: run_default,
    })


def run_task(
    name: str,
    config: InkwellConfig,
    tasks: Mapping[str, TaskHandler] | None = None,
) -> int:
    """Run the task registered under *name*.

    Raises:
        ConfigError: If no task has that name.

    """
    tasks = build_tasks() if tasks is None else tasks
    handler = tasks.get(name)
    if handler is None:
        msg = f"Unknown task {name!r} (expected one of: {', '.join(sorted(tasks))})"
        raise ConfigError(msg)
    return handler(config)


def run(task: str = DEFAULT_TASK, root: str | Path = ".", **overrides: object) -> int:
    """Load config from *root* (with overrides) and run *task*.

    Args:
        task: One of ``md``, ``watch``, ``webserver``, ``default``.
        root: Project root containing the source tree and optional config file.
        **overrides: Override InkwellConfig fields.

    """
    config = load_config(Path(root), **overrides)
    return run_task(task, config)
