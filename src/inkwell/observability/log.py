"""Build history — render passes and reload pushes, newest first.

Each render pass is kept together with its per-document results, so the
stats endpoint can answer "what failed last time" without scanning
unrelated events.  Reload pushes are kept in their own buffer.  Running
totals are counted separately and survive eviction from the buffers.

Thread Safety:
    Passes are recorded from the render worker thread while the server
    reads from the event loop; every method takes the lock.

"""

import threading
from collections import deque
from collections.abc import Sequence
from pathlib import PurePath
from typing import Any

from inkwell.observability.events import DocumentRendered, ReloadBroadcast, RenderPass


class EventLog:
    """Bounded history of render passes and reload broadcasts.

    Args:
        max_passes: Render passes retained, each with its document results.
        max_reloads: Reload broadcasts retained.

    """

    __slots__ = ("_lock", "_max_passes", "_passes", "_reloads", "_totals")

    def __init__(self, max_passes: int = 200, max_reloads: int = 200) -> None:
        self._max_passes = max_passes
        self._passes: deque[tuple[RenderPass, tuple[DocumentRendered, ...]]] = deque(
            maxlen=max_passes,
        )
        self._reloads: deque[ReloadBroadcast] = deque(maxlen=max_reloads)
        self._totals = {
            "passes": 0,
            "documents": 0,
            "failed": 0,
            "reloads": 0,
            "clients_notified": 0,
        }
        self._lock = threading.Lock()

    def record_pass(
        self,
        summary: RenderPass,
        documents: Sequence[DocumentRendered] = (),
    ) -> None:
        """Record a finished render pass and the documents it rendered."""
        with self._lock:
            self._passes.append((summary, tuple(documents)))
            self._totals["passes"] += 1
            self._totals["documents"] += summary.documents
            self._totals["failed"] += summary.failed

    def record_reload(self, event: ReloadBroadcast) -> None:
        """Record a reload pushed to connected browsers."""
        with self._lock:
            self._reloads.append(event)
            self._totals["reloads"] += 1
            self._totals["clients_notified"] += event.clients_notified

    def passes(self, limit: int = 10) -> list[RenderPass]:
        """Most recent render passes, newest first."""
        with self._lock:
            return [summary for summary, _ in reversed(self._passes)][:limit]

    def last_pass(self) -> RenderPass | None:
        with self._lock:
            return self._passes[-1][0] if self._passes else None

    def documents(
        self,
        *,
        path: str | None = None,
        failed_only: bool = False,
        limit: int = 50,
    ) -> list[DocumentRendered]:
        """Document results across retained passes, newest first.

        Args:
            path: Only documents whose path ends with these path components
                (``"a.md"`` matches ``/src/a.md`` but not ``/src/data.md``).
            failed_only: Skip documents that rendered cleanly.
            limit: Maximum number of results.

        """
        results: list[DocumentRendered] = []
        with self._lock:
            for _, documents in reversed(self._passes):
                for doc in documents:
                    if failed_only and doc.status == "ok":
                        continue
                    if path is not None and not PurePath(doc.path).match(path):
                        continue
                    results.append(doc)
                    if len(results) >= limit:
                        return results
        return results

    def reloads(self, limit: int = 10) -> list[ReloadBroadcast]:
        """Most recent reload broadcasts, newest first."""
        with self._lock:
            return list(reversed(self._reloads))[:limit]

    def __len__(self) -> int:
        """Number of retained render passes."""
        with self._lock:
            return len(self._passes)

    def stats(self) -> dict[str, Any]:
        """Running totals plus how much history is retained."""
        with self._lock:
            return {
                **self._totals,
                "retained_passes": len(self._passes),
                "max_passes": self._max_passes,
            }
