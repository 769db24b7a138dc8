"""Live reload — output watcher and browser script.

The server watches the output tree on its own, independently of the source
watcher: whatever writes there (normally the renderer), connected browsers
are told to reload.  The browser side is a tiny ``EventSource`` script
injected into every HTML response.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from watchfiles import awatch

from inkwell._errors import OutputError
from inkwell.observability import ReloadBroadcast, now_ns

if TYPE_CHECKING:
    from inkwell.config import InkwellConfig
    from inkwell.observability import EventLog
    from inkwell.reactive.broadcaster import Broadcaster

# SSE endpoint browsers subscribe to for reload signals
RELOAD_ENDPOINT = "/__inkwell/reload"

# Injected before </body>; no dependencies, just native EventSource.
RELOAD_SCRIPT = f"""\
<script data-inkwell-livereload>
(function() {{
  var src = new EventSource("{RELOAD_ENDPOINT}");
  src.addEventListener("reload", function() {{ location.reload(); }});
  src.onerror = function() {{
    src.close();
    setTimeout(function() {{ location.reload(); }}, 2000);
  }};
}})();
</script>"""


class OutputWatcher:
    """Watches the output tree and broadcasts a reload on every change batch.

    Args:
        config: Provides the output path and debounce window.
        broadcaster: Receives one ``push_reload`` per change batch.
        event_log: Records a ``ReloadBroadcast`` per push (optional).

    """

    def __init__(
        self,
        config: InkwellConfig,
        broadcaster: Broadcaster,
        event_log: EventLog | None = None,
    ) -> None:
        self._config = config
        self._broadcaster = broadcaster
        self._log = event_log
        self._stop_event = asyncio.Event()

    def stop(self) -> None:
        """Signal the watch loop to stop."""
        self._stop_event.set()

    async def notify(self, path: str) -> int:
        """Push a reload for *path* and record it."""
        clients = await self._broadcaster.push_reload(path)
        if self._log is not None:
            self._log.record_reload(
                ReloadBroadcast(path=path, clients_notified=clients, timestamp_ns=now_ns())
            )
        return clients

    async def run(self) -> None:
        """Watch the output tree until stopped.

        Raises:
            OutputError: If the output directory cannot be created.

        """
        output = self._config.output_path
        try:
            output.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Cannot create output directory {output}: {exc}"
            raise OutputError(msg) from exc

        self._stop_event.clear()
        async for raw_changes in awatch(
            output,
            stop_event=self._stop_event,
            debounce=self._config.debounce_ms,
            step=50,
        ):
            changed = sorted(path for _change, path in raw_changes)
            if changed:
                await self.notify(changed[0])
