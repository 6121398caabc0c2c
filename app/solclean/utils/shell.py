"""Subprocess helpers for the external tools solclean drives.

The git status adapter and the native clean invoker both run a command
in a given directory, with a timeout, and inspect its exit code and
output. Neither raises on a non-zero exit; callers decide what a failure
means for the cleanup.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit code of a finished command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: Path | None = None,
) -> CommandResult:
    """Run a command to completion and capture its text output.

    Args:
        args: Executable and its arguments.
        timeout: Seconds before the command is killed; None waits forever.
        cwd: Directory to run in, the current directory if None.

    Raises:
        subprocess.TimeoutExpired: If the command outlives timeout.
        FileNotFoundError: If the executable or cwd does not exist.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(result.stdout, result.stderr, result.returncode)


def command_exists(name: str) -> bool:
    """Tell whether name resolves to an executable on PATH."""
    return shutil.which(name) is not None
