"""Version control status adapters.

GitVersionControl answers "is this file tracked?" from ``git ls-files``.
The tracked set is listed once per repository and cached for the
lifetime of the adapter. Failed git queries are never cached.
"""

import logging
import os
import subprocess
from pathlib import Path

from solclean.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

_NOT_A_REPOSITORY = "not a git repository"


class VersionControlError(RuntimeError):
    """Raised when git cannot tell whether a file is tracked."""


class NullVersionControl:
    """VersionControlStatus for workspaces without version control."""

    def is_controlled(self, path: Path) -> bool:
        _ = path
        return False


class GitVersionControl:
    """VersionControlStatus backed by the git command line.

    Files outside any git repository, and all files when git is not
    installed, are reported as not controlled. Any other git failure
    raises VersionControlError, so the caller keeps the file.

    Args:
        timeout: Seconds allowed for each git invocation.
    """

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout
        self._git_missing = False
        self._toplevels: dict[str, Path | None] = {}
        self._tracked: dict[Path, frozenset[str]] = {}

    def is_controlled(self, path: Path) -> bool:
        """Check whether git tracks the file at path.

        Raises:
            VersionControlError: If git fails for a reason other than the
                file lying outside a repository.
        """
        directory = Path(os.path.realpath(path.parent))
        toplevel = self._toplevel(directory)
        if toplevel is None:
            return False

        try:
            relative = (directory / path.name).relative_to(toplevel).as_posix()
        except ValueError:
            return False

        return relative in self._tracked_files(toplevel)

    def _toplevel(self, directory: Path) -> Path | None:
        """Resolve the repository root containing directory (cached)."""
        key = str(directory)
        if key in self._toplevels:
            return self._toplevels[key]

        result = self._git(["rev-parse", "--show-toplevel"], directory)
        if result is None:
            return None

        toplevel: Path | None = None
        if result.success and result.stdout.strip():
            toplevel = Path(os.path.realpath(result.stdout.strip()))
        elif _NOT_A_REPOSITORY not in result.stderr:
            raise VersionControlError(
                f"git rev-parse failed in {directory}: {result.stderr.strip()}"
            )

        self._toplevels[key] = toplevel
        return toplevel

    def _tracked_files(self, toplevel: Path) -> frozenset[str]:
        """List files tracked in the repository at toplevel (cached)."""
        if toplevel in self._tracked:
            return self._tracked[toplevel]

        result = self._git(["ls-files", "-z", "--full-name"], toplevel)
        if result is None:
            return frozenset()
        if not result.success:
            raise VersionControlError(
                f"git ls-files failed in {toplevel}: {result.stderr.strip()}"
            )

        tracked = frozenset(name for name in result.stdout.split("\0") if name)
        logger.debug("git tracks %d files in %s", len(tracked), toplevel)

        self._tracked[toplevel] = tracked
        return tracked

    def _git(self, args: list[str], cwd: Path) -> CommandResult | None:
        """Run a git subcommand.

        Returns:
            The command result, or None when git is not installed.

        Raises:
            VersionControlError: If git could not be run or timed out.
        """
        if self._git_missing:
            return None

        try:
            return run_command(["git", *args], timeout=self._timeout, cwd=cwd)
        except FileNotFoundError as e:
            if command_exists("git"):
                raise VersionControlError(f"git {args[0]} failed in {cwd}: {e}") from e
            logger.warning("git is not installed; no file is treated as version-controlled")
            self._git_missing = True
            return None
        except (OSError, subprocess.TimeoutExpired) as e:
            raise VersionControlError(f"git {args[0]} failed in {cwd}: {e}") from e
