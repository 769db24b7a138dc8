"""Tests for inkwell._cli — argument parsing and command dispatch."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from inkwell._cli import _build_parser, _overrides, main


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_no_command_returns_none(self) -> None:
        assert _build_parser().parse_args([]).command is None

    def test_md_default_args(self) -> None:
        args = _build_parser().parse_args(["md"])
        assert args.command == "md"
        assert args.root == "."
        assert args.source_dir is None
        assert args.output_dir is None

    def test_webserver_flags(self) -> None:
        args = _build_parser().parse_args(
            ["webserver", "site/", "--host", "0.0.0.0", "--port", "9000", "--no-open"],
        )
        assert args.root == "site/"
        assert args.host == "0.0.0.0"
        assert args.port == 9000
        assert args.open_browser is False
        assert args.livereload is None

    def test_default_no_livereload(self) -> None:
        args = _build_parser().parse_args(["default", "--no-livereload"])
        assert args.livereload is False

    def test_watch_has_no_server_flags(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["watch", "--port", "1"])


class TestOverrides:
    """_overrides — only explicitly given flags override config."""

    def test_unset_flags_dropped(self) -> None:
        args = _build_parser().parse_args(["webserver"])
        assert _overrides(args) == {}

    def test_set_flags_kept(self) -> None:
        args = _build_parser().parse_args(["webserver", "--port", "9000", "--no-livereload"])
        assert _overrides(args) == {"port": 9000, "livereload": False}


class TestMain:
    """main — exit statuses."""

    def test_md_success(self, project: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["md", str(project)])
        assert exc_info.value.code == 0
        assert (project / "builds" / "markdown" / "output" / "a.html").is_file()

    def test_md_failure(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["md", str(tmp_path)])
        assert exc_info.value.code == 1

    def test_config_error_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "inkwell.yaml").write_text("bogus: 1\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["md", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "inkwell: Unknown config key(s): bogus" in capsys.readouterr().err

    def test_no_command_runs_default(self) -> None:
        with patch("inkwell._cli.run_task", return_value=0) as mock_run:
            with pytest.raises(SystemExit):
                main([])
        assert mock_run.call_args.args[0] == "default"

    def test_keyboard_interrupt_exits_cleanly(self) -> None:
        with patch("inkwell._cli.run_task", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main(["watch"])
        assert exc_info.value.code == 0
