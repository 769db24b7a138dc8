"""Development server — serves the output tree with live reload.

Builds a chirp ``App`` that serves rendered HTML from the output directory
at the site root.  With live reload on, every HTML response carries the
reload script, browsers hold an SSE connection on ``/__inkwell/reload``,
and an ``OutputWatcher`` running on the server's event loop pushes a
``reload`` event whenever the output tree changes.

In ``default`` mode the source watcher and rebuild pipeline run on the same
loop, started by the app's startup hooks.
"""

from __future__ import annotations

import asyncio
import json
import sys
import uuid
import webbrowser
from typing import TYPE_CHECKING, Any

from inkwell._errors import ServerError
from inkwell.reactive.broadcaster import Broadcaster, ReloadConnection
from inkwell.reactive.livereload import RELOAD_ENDPOINT, RELOAD_SCRIPT, OutputWatcher

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from chirp import App, Request

    from inkwell.config import InkwellConfig
    from inkwell.observability import EventLog
    from inkwell.reactive.pipeline import RebuildPipeline

STATS_ENDPOINT = "/__inkwell/stats"


def create_app(
    config: InkwellConfig,
    *,
    broadcaster: Broadcaster | None = None,
    event_log: EventLog | None = None,
    pipeline: RebuildPipeline | None = None,
) -> App:
    """Create the chirp App serving ``config.output_path``.

    The output directory is created when missing so the server can start
    before the first render pass.

    Args:
        config: Resolved InkwellConfig.
        broadcaster: Reload broadcaster (a new one when omitted).
        event_log: Backs the stats endpoint and records reload pushes.
        pipeline: When given, the source watcher feeding it runs on the
            server's event loop.

    Raises:
        ServerError: If the output directory cannot be created.

    """
    from chirp import App, AppConfig
    from chirp.middleware import HTMLInject, StaticFiles

    try:
        config.output_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {config.output_path}: {exc}"
        raise ServerError(msg) from exc

    app = App(config=AppConfig(host=config.host, port=config.port, debug=True))
    broadcaster = broadcaster or Broadcaster()

    if config.livereload:
        _register_reload_endpoint(app, broadcaster)
        app.add_middleware(HTMLInject(RELOAD_SCRIPT))

    if event_log is not None:
        _register_stats_endpoint(app, event_log)

    app.add_middleware(StaticFiles(
        directory=config.output_path,
        prefix="/",
        cache_control="no-cache",
    ))

    _wire_lifecycle(app, config, broadcaster, event_log, pipeline)
    return app


def _register_reload_endpoint(app: App, broadcaster: Broadcaster) -> None:
    """Register the SSE endpoint browsers listen on for reload signals."""
    from chirp import EventStream

    async def reload_events(request: Request) -> Any:
        conn = ReloadConnection(client_id=str(uuid.uuid4()))
        broadcaster.subscribe(conn)

        async def generate():  # type: ignore[return]
            try:
                async for event in broadcaster.client_generator(conn):
                    yield event
            finally:
                broadcaster.unsubscribe(conn)

        return EventStream(generate())

    app.route(RELOAD_ENDPOINT, name="inkwell:reload")(reload_events)


def _register_stats_endpoint(app: App, event_log: EventLog) -> None:
    """Register the ``/__inkwell/stats`` JSON endpoint."""

    async def stats_handler(request: Request) -> Any:
        from chirp.http.response import Response

        payload = {
            "totals": event_log.stats(),
            "recent_passes": [
                {
                    "trigger": event.trigger,
                    "documents": event.documents,
                    "failed": event.failed,
                    "duration_ms": round(event.duration_ms, 2),
                }
                for event in event_log.passes(limit=10)
            ],
            "recent_failures": [
                {"path": doc.path, "status": doc.status, "message": doc.message}
                for doc in event_log.documents(failed_only=True, limit=20)
            ],
            "recent_reloads": [
                {"path": event.path, "clients_notified": event.clients_notified}
                for event in event_log.reloads(limit=10)
            ],
        }
        return Response(
            body=json.dumps(payload, indent=2), status=200, content_type="application/json",
        )

    app.route(STATS_ENDPOINT, name="inkwell:stats")(stats_handler)


def _wire_lifecycle(
    app: App,
    config: InkwellConfig,
    broadcaster: Broadcaster,
    event_log: EventLog | None,
    pipeline: RebuildPipeline | None,
) -> None:
    """Start background watchers on startup and cancel them on shutdown."""
    from inkwell.content.watcher import SourceWatcher

    tasks: list[asyncio.Task[None]] = []
    output_watcher = OutputWatcher(config, broadcaster, event_log) if config.livereload else None
    source_watcher = SourceWatcher(config) if pipeline is not None else None

    def _spawn(name: str, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro, name=name)
        task.add_done_callback(_report_task_failure)
        tasks.append(task)

    @app.on_startup
    async def _start_background() -> None:
        if output_watcher is not None:
            _spawn("inkwell-output-watcher", output_watcher.run())
        if source_watcher is not None and pipeline is not None:
            _spawn("inkwell-source-watcher", source_watcher.run())
            _spawn("inkwell-rebuild", pipeline.consume(source_watcher.queue))
        if config.open_browser:
            await asyncio.to_thread(webbrowser.open, config.url)

    @app.on_shutdown
    async def _stop_background() -> None:
        if output_watcher is not None:
            output_watcher.stop()
        if source_watcher is not None:
            source_watcher.stop()
        for task in tasks:
            if not task.done():
                task.cancel()
        tasks.clear()


def _report_task_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        print(f"  {task.get_name()} stopped: {type(exc).__name__}: {exc}", file=sys.stderr)


def run_server(app: App, config: InkwellConfig) -> None:
    """Serve *app* until interrupted.

    Raises:
        ServerError: If the server cannot bind ``config.host:config.port``.

    """
    try:
        app.run(host=config.host, port=config.port)
    except OSError as exc:
        msg = f"Cannot serve on {config.host}:{config.port}: {exc}"
        raise ServerError(msg) from exc
