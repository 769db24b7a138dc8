"""Tests for inkwell.reporter — surfacing render results."""

from __future__ import annotations

from pathlib import Path

import pytest

from inkwell.content.results import BuildReport, RenderResult, RenderStatus
from inkwell.observability import EventLog
from inkwell.reporter import Reporter


def _report(root: Path) -> BuildReport:
    return BuildReport(
        results=(
            RenderResult(source=root / "a.md", output=root / "a.html", status=RenderStatus.OK),
            RenderResult(
                source=root / "bad.md",
                output=root / "bad.html",
                status=RenderStatus.INPUT_ERROR,
                message="not valid UTF-8",
            ),
        ),
        duration_ms=4.0,
    )


class TestReporter:
    """Reporter.report — stderr summary plus event log."""

    def test_summary_on_stderr(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        Reporter(root=tmp_path).report(_report(tmp_path), trigger="md")
        err = capsys.readouterr().err
        assert "md: rendered 1 document" in err
        assert "1 failed" in err
        assert "bad.md: not valid UTF-8" in err
        assert "input_error" in err

    def test_paths_relative_to_root(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        Reporter(root=tmp_path).report(_report(tmp_path))
        assert str(tmp_path) not in capsys.readouterr().err

    def test_clean_pass_has_no_failure_lines(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        report = BuildReport(results=(
            RenderResult(source=tmp_path / "a.md", output=None, status=RenderStatus.OK),
        ))
        Reporter().report(report)
        err = capsys.readouterr().err
        assert "failed" not in err
        assert err.count("\n") == 1

    def test_records_events(self, tmp_path: Path) -> None:
        log = EventLog()
        Reporter(log).report(_report(tmp_path), trigger="modified a.md")

        passes = log.passes()
        assert len(passes) == 1
        assert passes[0].trigger == "modified a.md"
        assert passes[0].documents == 2
        assert passes[0].failed == 1
        assert len(log.documents()) == 2
        [failure] = log.documents(failed_only=True)
        assert failure.message == "not valid UTF-8"

    def test_report_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        Reporter().report_error("md", RuntimeError("boom"))
        assert "md: RuntimeError: boom" in capsys.readouterr().err
