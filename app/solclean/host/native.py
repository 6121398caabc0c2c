"""Native clean action backed by an external command."""

import logging
import subprocess
from pathlib import Path

from solclean.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class CommandCleanInvoker:
    """NativeCleanInvoker running a build tool's clean command.

    The command runs synchronously in the workspace directory. A missing
    tool or a failing command is logged and otherwise ignored, the same
    way an IDE clean does nothing when no build system is configured.

    Args:
        command: Command and arguments, e.g. ["dotnet", "clean"].
        cwd: Directory to run the command in.
        timeout: Maximum seconds the command may run.
    """

    def __init__(self, command: list[str], cwd: Path, timeout: float = 600.0) -> None:
        self._command = list(command)
        self._cwd = cwd
        self._timeout = timeout

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def run_default_clean(self) -> None:
        """Run the clean command and wait for it to finish."""
        if not self._command:
            logger.info("No native clean command configured")
            return
        if not command_exists(self._command[0]):
            logger.warning("Native clean command not found: %s", self._command[0])
            return

        logger.info("Running native clean: %s (in %s)", " ".join(self._command), self._cwd)
        try:
            result = run_command(self._command, timeout=self._timeout, cwd=self._cwd)
        except FileNotFoundError:
            logger.warning("Native clean command not found: %s", self._command[0])
            return
        except subprocess.TimeoutExpired:
            logger.warning("Native clean timed out after %.0fs", self._timeout)
            return
        except OSError as e:
            logger.warning("Native clean could not be started: %s", e)
            return

        if not result.success:
            logger.warning(
                "Native clean exited with code %d: %s",
                result.returncode,
                result.stderr.strip() or result.stdout.strip(),
            )
            return
        logger.info("Native clean completed")
