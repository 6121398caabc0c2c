"""Local host: the adapters solclean uses when run from a terminal.

LocalHost bundles a directory workspace, git status, a console
reporter and an event hub, and plays the role of the IDE: its default
clean runs the configured clean command and then announces a finished
workspace clean, exactly like an IDE "Clean Solution" does.
"""

import logging
from pathlib import Path

from rich.console import Console

from solclean.cleanup.discovery import FolderDiscovery
from solclean.core.events import BuildAction, BuildScope, EventHub
from solclean.core.orchestrator import CleanupOrchestrator
from solclean.core.services import VersionControlStatus
from solclean.core.settings import Settings, TomlSettingsStore
from solclean.host.native import CommandCleanInvoker
from solclean.host.reporter import ConsoleReporter
from solclean.host.vcs import GitVersionControl, NullVersionControl
from solclean.host.workspace import DirectoryWorkspaceProvider

logger = logging.getLogger(__name__)


class LocalHost:
    """Host environment for one workspace directory.

    Args:
        root: Workspace directory or project file.
        settings: Loaded settings.
        console: Console used by the status reporter.
        use_vcs: Consult git before deleting files.
        quiet: Suppress per-item messages.
    """

    def __init__(
        self,
        root: Path,
        settings: Settings,
        console: Console,
        *,
        use_vcs: bool = True,
        quiet: bool = False,
    ) -> None:
        self.settings = settings
        self.events = EventHub()
        self.workspace = DirectoryWorkspaceProvider(root, settings.workspace.project_patterns)
        self.vcs: VersionControlStatus = GitVersionControl() if use_vcs else NullVersionControl()
        self.reporter = ConsoleReporter(console, quiet=quiet)
        self.discovery = FolderDiscovery(settings.cleanup.effective_external_root)

        workspace = self.workspace.current_workspace()
        cwd = workspace.directory if workspace is not None else self.workspace.root
        self._clean_command = CommandCleanInvoker(settings.cleanup.native_clean_command, cwd)

    def run_default_clean(self) -> None:
        """Run the native clean command, then announce a finished workspace clean."""
        self._clean_command.run_default_clean()
        self.events.emit_build_finished(BuildScope.WORKSPACE, BuildAction.CLEAN)

    def close_workspace(self) -> None:
        """Announce that the workspace is closing."""
        self.events.emit_workspace_closing()

    def create_orchestrator(
        self,
        store: TomlSettingsStore,
        settle_delay: float | None = None,
    ) -> CleanupOrchestrator:
        """Build an orchestrator wired to this host and attached to its events.

        Args:
            store: Settings store supplying rule snapshots.
            settle_delay: Override of the configured settle delay.
        """
        delay = settle_delay
        if delay is None:
            delay = self.settings.cleanup.settle_delay_seconds
        orchestrator = CleanupOrchestrator(
            workspace=self.workspace,
            vcs=self.vcs,
            native_clean=self,
            reporter=self.reporter,
            settings=store,
            events=self.events,
            discovery=self.discovery,
            settle_delay=delay,
            marker_suffix=self.settings.cleanup.marker_suffix,
        )
        orchestrator.attach()
        logger.debug(
            "Orchestrator attached for %s (settle delay %.1fs)", self.workspace.root, delay
        )
        return orchestrator
