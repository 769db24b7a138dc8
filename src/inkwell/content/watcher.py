"""Source watcher — feeds change events to the rebuild pipeline.

Monitors the source tree for created, modified and deleted documents
matching the document extension.  Each filesystem change becomes a
``ChangeEvent`` on a single asyncio queue; the rebuild pipeline is the
only consumer.  The output tree is never reported, even when it lives
inside the source tree.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, DefaultFilter, awatch

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from inkwell._types import ChangeKind
    from inkwell.config import InkwellConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A source document change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: ChangeKind


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


class SourceFilter(DefaultFilter):
    """watchfiles filter: documents with the given extension, outside ``exclude``."""

    def __init__(self, extension: str, exclude: Path | None = None) -> None:
        self._extension = extension
        self._exclude = exclude
        super().__init__()

    def __call__(self, change: Change, path: str) -> bool:
        candidate = Path(path)
        if candidate.suffix != self._extension:
            return False
        if self._exclude is not None and candidate.is_relative_to(self._exclude):
            return False
        return super().__call__(change, path)


def to_change_event(change: Change, path: str) -> ChangeEvent:
    """Convert a raw watchfiles change into a ChangeEvent."""
    return ChangeEvent(path=Path(path), kind=_CHANGE_KIND_MAP.get(change, "modified"))


class SourceWatcher:
    """Watches the source tree and publishes ChangeEvents on a queue.

    ``run()`` is the producer and must be scheduled on the event loop that
    consumes ``changes()``.  It returns once ``stop()`` is called.

    """

    def __init__(self, config: InkwellConfig) -> None:
        self._config = config
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._stop_event = asyncio.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether the producer coroutine is active."""
        return self._running

    @property
    def queue(self) -> asyncio.Queue[ChangeEvent]:
        """The change channel (one consumer)."""
        return self._queue

    def publish(self, event: ChangeEvent) -> None:
        """Put an event on the channel."""
        self._queue.put_nowait(event)

    def stop(self) -> None:
        """Signal the producer to stop."""
        self._stop_event.set()

    async def run(self) -> None:
        """Watch the source tree until stopped."""
        watch_filter = SourceFilter(self._config.extension, exclude=self._config.output_path)
        self._stop_event.clear()
        self._running = True
        try:
            async for raw_changes in awatch(
                self._config.source_path,
                watch_filter=watch_filter,
                stop_event=self._stop_event,
                debounce=self._config.debounce_ms,
                step=50,
            ):
                for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
                    self.publish(to_change_event(change_type, path_str))
        finally:
            self._running = False

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvents as they arrive."""
        while True:
            yield await self._queue.get()
