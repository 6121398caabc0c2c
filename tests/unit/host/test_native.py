"""Unit tests for the command-backed native clean."""

import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from solclean.host.native import CommandCleanInvoker
from solclean.utils.shell import CommandResult


class TestCommandCleanInvoker:
    """Tests for CommandCleanInvoker.run_default_clean."""

    def test_runs_command_in_workspace(self, tmp_path: Path) -> None:
        """The command runs in the workspace directory."""
        invoker = CommandCleanInvoker(["dotnet", "clean"], tmp_path, timeout=30)

        with (
            patch("solclean.host.native.command_exists", return_value=True),
            patch("solclean.host.native.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="Done.", stderr="", returncode=0)
            invoker.run_default_clean()

        mock_run.assert_called_once_with(["dotnet", "clean"], timeout=30, cwd=tmp_path)

    def test_empty_command_does_nothing(self, tmp_path: Path) -> None:
        """Without a command nothing is run."""
        with patch("solclean.host.native.run_command") as mock_run:
            CommandCleanInvoker([], tmp_path).run_default_clean()

        mock_run.assert_not_called()

    def test_missing_tool_is_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A tool that is not installed is logged, not run."""
        with (
            patch("solclean.host.native.command_exists", return_value=False),
            patch("solclean.host.native.run_command") as mock_run,
            caplog.at_level(logging.WARNING, logger="solclean.host.native"),
        ):
            CommandCleanInvoker(["msbuild", "-t:Clean"], tmp_path).run_default_clean()

        mock_run.assert_not_called()
        assert "not found: msbuild" in caplog.text

    def test_failing_command_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A non-zero exit is logged and does not raise."""
        with (
            patch("solclean.host.native.command_exists", return_value=True),
            patch("solclean.host.native.run_command") as mock_run,
            caplog.at_level(logging.WARNING, logger="solclean.host.native"),
        ):
            mock_run.return_value = CommandResult(
                stdout="", stderr="MSB1003: no project file", returncode=1
            )
            CommandCleanInvoker(["dotnet", "clean"], tmp_path).run_default_clean()

        assert "exited with code 1" in caplog.text
        assert "MSB1003" in caplog.text

    def test_timeout_is_swallowed(self, tmp_path: Path) -> None:
        """A command exceeding its timeout does not raise."""
        with (
            patch("solclean.host.native.command_exists", return_value=True),
            patch(
                "solclean.host.native.run_command",
                side_effect=subprocess.TimeoutExpired(["dotnet", "clean"], 600),
            ),
        ):
            CommandCleanInvoker(["dotnet", "clean"], tmp_path).run_default_clean()

    def test_command_is_copied(self, tmp_path: Path) -> None:
        """The command list is not shared with the caller."""
        command = ["dotnet", "clean"]
        invoker = CommandCleanInvoker(command, tmp_path)
        command.append("--no-restore")

        assert invoker.command == ["dotnet", "clean"]
