"""Typed render results.

Every render and every filesystem operation in a pass produces a value
that says how it went, instead of raising.  Failures of one document never
abort the rest of the pass; the report is handed to the reporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class RenderStatus(StrEnum):
    """Outcome of rendering one source document."""

    OK = "ok"
    INPUT_ERROR = "input_error"
    IO_ERROR = "io_error"


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Outcome of rendering a single source document.

    Attributes:
        source: Absolute path to the source document.
        output: Absolute path of the HTML file (None when it was never computed).
        status: Success, input error, or I/O error.
        message: Error description for failures, empty on success.
        duration_ms: Wall time spent on this document.

    """

    source: Path
    output: Path | None
    status: RenderStatus
    message: str = ""
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is RenderStatus.OK


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Outcome of one full render pass over the source tree."""

    results: tuple[RenderResult, ...]
    duration_ms: float = 0.0

    @property
    def rendered(self) -> tuple[RenderResult, ...]:
        """Documents written successfully."""
        return tuple(r for r in self.results if r.ok)

    @property
    def failed(self) -> tuple[RenderResult, ...]:
        """Documents that failed for any reason."""
        return tuple(r for r in self.results if not r.ok)

    @property
    def input_errors(self) -> tuple[RenderResult, ...]:
        return tuple(r for r in self.results if r.status is RenderStatus.INPUT_ERROR)

    @property
    def io_errors(self) -> tuple[RenderResult, ...]:
        return tuple(r for r in self.results if r.status is RenderStatus.IO_ERROR)

    @property
    def ok(self) -> bool:
        """True when every document in the pass rendered."""
        return not self.failed
