"""Host service interfaces consumed by the cleanup engine.

The engine never talks to a concrete host directly. It is handed
objects satisfying these protocols; ``solclean.host`` provides local
implementations backed by the filesystem, git, and the rich console.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from solclean.cleanup.paths import PathComparer
from solclean.cleanup.rules import DeletionRuleSet


@dataclass(frozen=True, slots=True)
class Project:
    """A project of the open workspace.

    Attributes:
        path: Full path of the project file, or None if the host could
            not resolve one.
        loaded: Whether the host has the project loaded.
    """

    path: Path | None
    loaded: bool = True

    @property
    def root(self) -> Path | None:
        """Directory containing the project file."""
        if self.path is None:
            return None
        return self.path.parent


@dataclass(frozen=True, slots=True)
class Workspace:
    """The top-level container of projects the user has open.

    Attributes:
        path: Workspace file or directory, used in messages.
    """

    path: Path

    @property
    def directory(self) -> Path:
        return self.path if self.path.is_dir() else self.path.parent


@runtime_checkable
class WorkspaceProvider(Protocol):
    """Enumerates the open workspace and its projects."""

    def current_workspace(self) -> Workspace | None: ...

    def all_projects(self) -> Sequence[Project]: ...


@runtime_checkable
class VersionControlStatus(Protocol):
    """Answers whether a file is under version control."""

    def is_controlled(self, path: Path) -> bool: ...


@runtime_checkable
class NativeCleanInvoker(Protocol):
    """Runs the host's own clean action synchronously."""

    def run_default_clean(self) -> None: ...


@runtime_checkable
class StatusReporter(Protocol):
    """Fire-and-forget output and progress surface."""

    def message(self, text: str) -> None: ...

    def progress(self, label: str, current: int, total: int) -> None: ...

    def status_bar_message(self, text: str) -> None: ...


@runtime_checkable
class SettingsStore(Protocol):
    """Supplies the current deletion rules on demand."""

    def snapshot(self) -> DeletionRuleSet: ...


def project_roots(projects: Iterable[Project]) -> list[Path]:
    """Roots of loaded projects with a resolvable path, deduplicated.

    Unloaded projects and projects without a path are skipped silently.
    """
    roots = [
        root for project in projects if project.loaded and (root := project.root) is not None
    ]
    return PathComparer().dedupe(roots)
