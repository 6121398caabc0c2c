"""Directory-backed workspace provider.

Treats a directory as the open workspace and every project file below
it (matched by glob patterns) as one of its projects. A solution file
at the top of the directory, if there is exactly one, names the
workspace in messages.
"""

import fnmatch
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from solclean.cleanup.rules import (
    BUILD_OUTPUT_FOLDERS,
    IDE_METADATA_FOLDER,
    PACKAGES_FOLDER,
    TEST_RESULTS_FOLDER,
)
from solclean.core.services import Project, Workspace
from solclean.core.settings import DEFAULT_PROJECT_PATTERNS

logger = logging.getLogger(__name__)

SOLUTION_PATTERNS: tuple[str, ...] = ("*.sln", "*.slnx")

# Never searched for project files
_SKIP_DIRS: frozenset[str] = frozenset(
    {
        *BUILD_OUTPUT_FOLDERS,
        PACKAGES_FOLDER,
        TEST_RESULTS_FOLDER,
        IDE_METADATA_FOLDER,
        ".git",
        ".hg",
        ".svn",
        "node_modules",
    }
)


def _matches(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


class DirectoryWorkspaceProvider:
    """WorkspaceProvider for a directory or a single project file.

    Args:
        root: Workspace directory, or a project file for a one-project
            workspace.
        project_patterns: Glob patterns identifying project files.
    """

    def __init__(
        self,
        root: Path,
        project_patterns: Sequence[str] = DEFAULT_PROJECT_PATTERNS,
    ) -> None:
        self._root = Path(os.path.abspath(root))
        self._patterns = tuple(project_patterns)

    @property
    def root(self) -> Path:
        return self._root

    def current_workspace(self) -> Workspace | None:
        """Get the workspace, or None if the root does not exist."""
        if self._root.is_file():
            return Workspace(path=self._root)
        if not self._root.is_dir():
            return None

        solutions = sorted(
            entry
            for entry in self._root.iterdir()
            if entry.is_file() and _matches(entry.name, SOLUTION_PATTERNS)
        )
        if len(solutions) == 1:
            return Workspace(path=solutions[0])
        return Workspace(path=self._root)

    def all_projects(self) -> Sequence[Project]:
        """Find all project files of the workspace, in sorted walk order."""
        if self._root.is_file():
            if _matches(self._root.name, self._patterns):
                return [Project(path=self._root)]
            return []
        if not self._root.is_dir():
            return []

        def _on_error(error: OSError) -> None:
            logger.warning("Cannot search %s: %s", error.filename, error.strerror)

        projects: list[Project] = []
        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
            projects.extend(
                Project(path=Path(dirpath) / name)
                for name in sorted(filenames)
                if _matches(name, self._patterns)
            )

        logger.debug("Found %d projects under %s", len(projects), self._root)
        return projects
