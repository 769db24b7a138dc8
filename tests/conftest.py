"""Shared test fixtures for inkwell."""

from __future__ import annotations

from pathlib import Path

import pytest

from inkwell.config import InkwellConfig


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a minimal project with the default source layout.

    Returns the project root; sources live under ``builds/markdown``.
    """
    source = tmp_path / "builds" / "markdown"
    source.mkdir(parents=True)
    (source / "index.md").write_text("# Home\n\nWelcome to the docs.\n")
    (source / "a.md").write_text("# Title\n\nSome *text*.\n")

    nested = source / "guide"
    nested.mkdir()
    (nested / "intro.md").write_text(
        "## Intro\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"
    )
    (nested / "notes.txt").write_text("not a markdown document\n")
    return tmp_path


@pytest.fixture
def config(project: Path) -> InkwellConfig:
    """An InkwellConfig rooted at the test project, browser opening off."""
    return InkwellConfig(root=project, open_browser=False)


@pytest.fixture
def source_root(config: InkwellConfig) -> Path:
    return config.source_path


@pytest.fixture
def output_root(config: InkwellConfig) -> Path:
    return config.output_path
