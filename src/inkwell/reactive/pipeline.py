"""Rebuild pipeline — consumes source changes and re-renders.

Flow:
    1. SourceWatcher puts a ChangeEvent on its queue
    2. The pipeline takes it off the queue
    3. A full render pass runs in a worker thread
    4. The BuildReport goes to the Reporter

Every event re-renders the whole tree; there is no incremental rebuild and
no coalescing of events that queue up behind a running pass.  Passes never
overlap: the next event is taken only once the current pass has finished.
Running the pass off the event loop keeps HTTP and SSE traffic flowing
while it works.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from inkwell._errors import InkwellError
from inkwell.content.renderer import MarkdownRenderer, render_all

if TYPE_CHECKING:
    from inkwell.config import InkwellConfig
    from inkwell.content.results import BuildReport
    from inkwell.content.watcher import ChangeEvent
    from inkwell.reporter import Reporter


class RebuildPipeline:
    """Render-request consumer for the source watcher's change channel.

    Args:
        config: Build configuration.
        reporter: Receives every pass's BuildReport.
        renderer: Markdown renderer to reuse across passes (built from
            ``config`` when omitted).

    """

    def __init__(
        self,
        config: InkwellConfig,
        reporter: Reporter,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        self._config = config
        self._reporter = reporter
        self._renderer = renderer or MarkdownRenderer(config.renderer_options)
        self._passes = 0

    @property
    def passes(self) -> int:
        """Number of render passes run so far."""
        return self._passes

    async def rebuild(self, trigger: str) -> BuildReport:
        """Run one full render pass in a worker thread and report it."""
        report = await asyncio.to_thread(render_all, self._config, self._renderer)
        self._passes += 1
        self._reporter.report(report, trigger=trigger)
        return report

    async def handle(self, event: ChangeEvent) -> BuildReport:
        """Re-render for one change event."""
        return await self.rebuild(self._describe(event))

    async def consume(self, queue: asyncio.Queue[ChangeEvent]) -> None:
        """Drain the change channel forever, one full pass per event."""
        while True:
            event = await queue.get()
            try:
                await self.handle(event)
            except InkwellError as exc:
                self._reporter.report_error(self._describe(event), exc)
            finally:
                queue.task_done()

    def _describe(self, event: ChangeEvent) -> str:
        try:
            name = str(event.path.relative_to(self._config.source_path))
        except ValueError:
            name = event.path.name
        return f"{event.kind} {name}"
