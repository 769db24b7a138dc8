"""Tests for inkwell.content.watcher — source change detection."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from watchfiles import Change

from inkwell.config import InkwellConfig
from inkwell.content.watcher import ChangeEvent, SourceFilter, SourceWatcher, to_change_event


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/test.md"), kind="modified")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert ChangeEvent(Path("/a.md"), "modified") == ChangeEvent(Path("/a.md"), "modified")

    def test_hashable(self) -> None:
        assert isinstance(hash(ChangeEvent(Path("/a.md"), "created")), int)


class TestToChangeEvent:
    """to_change_event — watchfiles Change to kind literal."""

    @pytest.mark.parametrize(
        ("change", "kind"),
        [(Change.added, "created"), (Change.modified, "modified"), (Change.deleted, "deleted")],
    )
    def test_kinds(self, change: Change, kind: str) -> None:
        event = to_change_event(change, "/src/a.md")
        assert event == ChangeEvent(path=Path("/src/a.md"), kind=kind)  # type: ignore[arg-type]


class TestSourceFilter:
    """SourceFilter — extension and output-tree filtering."""

    def test_accepts_markdown(self, tmp_path: Path) -> None:
        assert SourceFilter(".md")(Change.modified, str(tmp_path / "a.md"))

    def test_rejects_other_extensions(self, tmp_path: Path) -> None:
        assert not SourceFilter(".md")(Change.modified, str(tmp_path / "a.txt"))

    def test_rejects_output_tree(self, tmp_path: Path) -> None:
        out = tmp_path / "output"
        assert not SourceFilter(".md", exclude=out)(Change.added, str(out / "a.md"))

    def test_rejects_default_ignored_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / ".git" / "a.md"
        assert not SourceFilter(".md")(Change.modified, str(path))


class TestSourceWatcher:
    """SourceWatcher — channel and lifecycle."""

    @pytest.mark.asyncio
    async def test_publish_and_iterate(self, config: InkwellConfig) -> None:
        watcher = SourceWatcher(config)
        event = ChangeEvent(config.source_path / "a.md", "modified")
        watcher.publish(event)

        changes = watcher.changes()
        assert await asyncio.wait_for(changes.__anext__(), timeout=1.0) == event

    @pytest.mark.asyncio
    async def test_detects_edit(self, config: InkwellConfig) -> None:
        watcher = SourceWatcher(config)
        task = asyncio.create_task(watcher.run())
        try:
            await asyncio.sleep(0.5)
            assert watcher.is_running
            (config.source_path / "a.md").write_text("# Edited\n")

            event = await asyncio.wait_for(watcher.queue.get(), timeout=10.0)
            assert event.path.name == "a.md"
            assert event.kind in ("created", "modified")
        finally:
            watcher.stop()
            await asyncio.wait_for(task, timeout=5.0)
        assert not watcher.is_running

    @pytest.mark.asyncio
    async def test_ignores_output_writes(self, config: InkwellConfig) -> None:
        config.output_path.mkdir(parents=True)
        watcher = SourceWatcher(config)
        task = asyncio.create_task(watcher.run())
        try:
            await asyncio.sleep(0.5)
            (config.output_path / "x.md").write_text("# Output\n")
            (config.output_path / "x.html").write_text("<h1>Output</h1>")
            await asyncio.sleep(1.0)
            assert watcher.queue.empty()
        finally:
            watcher.stop()
            await asyncio.wait_for(task, timeout=5.0)
