"""Observability — build and reload history.

Records what the render passes and the reload channel did:

- **Renderer**: per-document results and whole-pass summaries
- **Live reload**: notifications pushed to connected browsers

All events are frozen dataclasses with nanosecond timestamps, safe to
record from the render worker thread and the event loop alike.

Quick Start:
    >>> from inkwell.observability import EventLog, RenderPass, now_ns
    >>> log = EventLog()
    >>> log.record_pass(RenderPass("md", 3, 0, 12.5, now_ns()))
    >>> len(log)
    1

"""

from inkwell.observability.events import (
    DocumentRendered,
    ReloadBroadcast,
    RenderPass,
    StackEvent,
    now_ns,
)
from inkwell.observability.log import EventLog

__all__ = [
    "DocumentRendered",
    "EventLog",
    "ReloadBroadcast",
    "RenderPass",
    "StackEvent",
    "now_ns",
]
