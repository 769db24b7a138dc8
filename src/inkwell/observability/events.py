"""Event model for build and reload observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Render events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocumentRendered:
    """One source document went through the renderer.

    Attributes:
        path: Source document path.
        status: ``ok``, ``input_error`` or ``io_error``.
        duration_ms: Time spent on the document in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.
        message: Failure detail; empty for documents that rendered.

    """

    path: str
    status: str
    duration_ms: float
    timestamp_ns: int
    message: str = ""


@dataclass(frozen=True, slots=True)
class RenderPass:
    """A full render pass completed.

    Attributes:
        trigger: What started the pass (``md``, or the changed source path).
        documents: Number of documents in the pass.
        failed: Number of documents that failed.
        duration_ms: Wall time of the pass in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger: str
    documents: int
    failed: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Live reload events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReloadBroadcast:
    """A reload notification was pushed to connected browsers.

    Attributes:
        path: Output file whose change triggered the reload.
        clients_notified: Number of SSE clients that received it.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    clients_notified: int
    timestamp_ns: int


type StackEvent = DocumentRendered | RenderPass | ReloadBroadcast


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
