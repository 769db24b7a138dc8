"""Build reporter — surfaces render results to the operator.

Every render pass ends here: a one-line summary on stderr, one line per
failed document, and the pass recorded in the event log.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from inkwell.banner import style
from inkwell.observability import DocumentRendered, RenderPass, now_ns

if TYPE_CHECKING:
    from pathlib import Path

    from inkwell.content.results import BuildReport, RenderResult
    from inkwell.observability import EventLog


class Reporter:
    """Prints and records render passes.

    Args:
        event_log: Where pass and document events are recorded (optional).
        root: Paths are printed relative to this directory when possible.

    """

    def __init__(self, event_log: EventLog | None = None, root: Path | None = None) -> None:
        self._log = event_log
        self._root = root

    @property
    def event_log(self) -> EventLog | None:
        return self._log

    def report(self, report: BuildReport, *, trigger: str = "md") -> None:
        """Print a pass summary and record it."""
        if self._log is not None:
            ts = now_ns()
            summary = RenderPass(
                trigger=trigger,
                documents=len(report.results),
                failed=len(report.failed),
                duration_ms=report.duration_ms,
                timestamp_ns=ts,
            )
            self._log.record_pass(summary, [
                DocumentRendered(
                    path=str(result.source),
                    status=str(result.status),
                    duration_ms=result.duration_ms,
                    timestamp_ns=ts,
                    message=result.message,
                )
                for result in report.results
            ])

        count = len(report.rendered)
        docs_label = "document" if count == 1 else "documents"
        mark = style("green", "✓") if report.ok else style("yellow", "!")
        summary = (
            f"  {mark} {trigger}: rendered {count} {docs_label} "
            f"{style('dim', f'in {report.duration_ms:.0f}ms')}"
        )
        if report.failed:
            summary += f", {style('yellow', f'{len(report.failed)} failed')}"
        print(summary, file=sys.stderr)

        for result in report.failed:
            print(self.format_failure(result), file=sys.stderr)

    def report_error(self, trigger: str, exc: BaseException) -> None:
        """Print an error that aborted a whole pass."""
        print(
            f"  {style('yellow', '!')} {trigger}: {type(exc).__name__}: {exc}",
            file=sys.stderr,
        )

    def format_failure(self, result: RenderResult) -> str:
        """One stderr line describing a failed document."""
        return f"    {style('dim', str(result.status))} {self._display(result.source)}: {result.message}"

    def _display(self, path: Path) -> str:
        if self._root is not None and path.is_relative_to(self._root):
            return str(path.relative_to(self._root))
        return str(path)
