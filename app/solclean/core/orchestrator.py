"""Cleanup orchestration.

The CleanupOrchestrator turns triggers (manual command, build-finished
notification, workspace closing) into cleanup passes. At most one pass
runs at a time; triggers arriving while a pass is active are rejected.

A pass runs on a background worker:

1. Resolve the workspace and its project roots.
2. Discover candidate folders and delete them (first sweep).
3. Optionally run the host's native clean action.
4. Wait for the settle delay.
5. Discover and delete again to catch regenerated files (second sweep).
"""

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from solclean.cleanup.deleter import DEFAULT_MARKER_SUFFIX, SafeDeleter
from solclean.cleanup.discovery import FolderDiscovery
from solclean.cleanup.models import DeletionReport
from solclean.cleanup.rules import DeletionRuleSet
from solclean.core.events import BuildAction, BuildScope, EventHub
from solclean.core.services import (
    NativeCleanInvoker,
    SettingsStore,
    StatusReporter,
    VersionControlStatus,
    WorkspaceProvider,
    project_roots,
)
from solclean.core.settings import DEFAULT_SETTLE_DELAY

logger = logging.getLogger(__name__)

CAPTION = "Solution Cleanup"

MSG_BUSY = f"{CAPTION} is already running."
MSG_NO_WORKSPACE = "There is no open workspace."
MSG_DEFAULT_CLEANUP = "Running default cleanup..."
MSG_DEFAULT_CLEANUP_DONE = "Default cleanup completed."
MSG_DELETE_AUTO_CREATED = "Removing automatically recreated files as well..."


class OrchestratorState(str, Enum):
    """Lifecycle state of the orchestrator."""

    IDLE = "idle"
    RUNNING = "running"


class Trigger(str, Enum):
    """Source that requested a cleanup pass."""

    MANUAL = "manual"
    BUILD_FINISHED = "build_finished"
    WORKSPACE_CLOSING = "workspace_closing"


@dataclass(slots=True)
class CleanupResult:
    """Summary of one cleanup pass.

    Attributes:
        trigger: What started the pass.
        first_sweep: Report of the sweep before the settle delay.
        second_sweep: Report of the sweep after the settle delay.
        ran_native_clean: Whether the native clean action was invoked.
        completed: Whether both sweeps ran to the end.
        reason: Why the pass ended early, None if it completed.
        error: Message of an unexpected failure, None otherwise.
    """

    trigger: Trigger
    first_sweep: DeletionReport | None = None
    second_sweep: DeletionReport | None = None
    ran_native_clean: bool = False
    completed: bool = False
    reason: str | None = None
    error: str | None = None

    @property
    def reports(self) -> list[DeletionReport]:
        return [r for r in (self.first_sweep, self.second_sweep) if r is not None]

    @property
    def has_failures(self) -> bool:
        return self.error is not None or any(r.has_failures for r in self.reports)


class CleanupOrchestrator:
    """Runs cleanup passes, one at a time, in response to triggers.

    Args:
        workspace: Provider of the open workspace and its projects.
        vcs: Version control status used by the deleter.
        native_clean: Host default clean action.
        reporter: Status surface for messages and progress.
        settings: Store supplying the rule snapshot for each pass.
        events: Lifecycle event hub; required for attach().
        discovery: Folder discovery; defaults to one without external root.
        settle_delay: Seconds to wait between the two sweeps.
        marker_suffix: Suffix of files the deleter never removes.
        executor: Executor running passes. If None, a single-worker
            thread pool is created and owned by the orchestrator.
        sleep: Function used for the settle delay.
    """

    def __init__(
        self,
        workspace: WorkspaceProvider,
        vcs: VersionControlStatus,
        native_clean: NativeCleanInvoker,
        reporter: StatusReporter,
        settings: SettingsStore,
        events: EventHub | None = None,
        *,
        discovery: FolderDiscovery | None = None,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        marker_suffix: str = DEFAULT_MARKER_SUFFIX,
        executor: Executor | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._workspace = workspace
        self._vcs = vcs
        self._native_clean = native_clean
        self._reporter = reporter
        self._settings = settings
        self._events = events
        self._discovery = discovery or FolderDiscovery()
        self._settle_delay = settle_delay
        self._marker_suffix = marker_suffix
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="solclean"
        )
        self._sleep = sleep

        self._lock = threading.Lock()
        self._state = OrchestratorState.IDLE
        self._attached = False
        self._future: Future[CleanupResult] | None = None
        self._last_result: CleanupResult | None = None

    # === State ===

    @property
    def state(self) -> OrchestratorState:
        with self._lock:
            return self._state

    @property
    def busy(self) -> bool:
        return self.state == OrchestratorState.RUNNING

    @property
    def last_result(self) -> CleanupResult | None:
        return self._last_result

    def _try_start(self) -> bool:
        """Atomically switch from IDLE to RUNNING.

        Returns:
            True if this caller now owns the pass, False if one is running.
        """
        with self._lock:
            if self._state == OrchestratorState.RUNNING:
                return False
            self._state = OrchestratorState.RUNNING
            return True

    def _finish(self) -> None:
        with self._lock:
            self._state = OrchestratorState.IDLE

    # === Event wiring ===

    def attach(self) -> None:
        """Subscribe to build-finished and workspace-closing notifications.

        Raises:
            ValueError: If the orchestrator was created without an event hub.
        """
        if self._events is None:
            msg = "Cannot attach an orchestrator without an event hub"
            raise ValueError(msg)
        with self._lock:
            if self._attached:
                return
            self._attached = True
        self._events.subscribe_build_finished(self.on_build_finished)
        self._events.subscribe_workspace_closing(self.on_workspace_closing)

    def detach(self) -> None:
        """Unsubscribe from all lifecycle notifications."""
        with self._lock:
            if not self._attached:
                return
            self._attached = False
        if self._events is not None:
            self._events.unsubscribe_build_finished(self.on_build_finished)
            self._events.unsubscribe_workspace_closing(self.on_workspace_closing)

    def _suspend_build_listener(self) -> None:
        # The pass may run the native clean, which fires build-finished again.
        if self._events is not None:
            self._events.unsubscribe_build_finished(self.on_build_finished)

    def _resume_build_listener(self) -> None:
        with self._lock:
            attached = self._attached
        if attached and self._events is not None:
            self._events.subscribe_build_finished(self.on_build_finished)

    # === Triggers ===

    def run(self) -> Future[CleanupResult] | None:
        """Start a cleanup pass now.

        Returns:
            Future of the pass result, or None if a pass is already running.
        """
        return self._trigger(Trigger.MANUAL)

    def on_build_finished(self, scope: BuildScope, action: BuildAction) -> None:
        """Handle a build-finished notification.

        Only a clean of the whole workspace starts a pass.
        """
        if scope != BuildScope.WORKSPACE or action != BuildAction.CLEAN:
            logger.debug("Ignoring build event: scope=%s action=%s", scope, action)
            return
        self._trigger(Trigger.BUILD_FINISHED)

    def on_workspace_closing(self) -> None:
        """Handle a workspace-closing notification.

        Starts a pass only when run_on_workspace_close is enabled.
        """
        if not self._settings.snapshot().run_on_workspace_close:
            logger.debug("Run on close disabled, ignoring workspace close")
            return
        self._trigger(Trigger.WORKSPACE_CLOSING)

    def _trigger(self, trigger: Trigger) -> Future[CleanupResult] | None:
        if not self._try_start():
            logger.info("Rejected %s trigger, a cleanup is already running", trigger.value)
            self._reporter.message(MSG_BUSY)
            return None

        try:
            future = self._executor.submit(self._run_pass, trigger)
        except RuntimeError as e:
            # Executor already shut down
            logger.error("Cannot schedule cleanup: %s", e)
            self._finish()
            return None

        with self._lock:
            self._future = future
        return future

    def wait(self, timeout: float | None = None) -> CleanupResult | None:
        """Block until the most recently started pass has finished.

        Args:
            timeout: Maximum seconds to wait, None waits indefinitely.

        Returns:
            Result of that pass, or None if no pass was ever started.
        """
        with self._lock:
            future = self._future
        if future is None:
            return None
        return future.result(timeout=timeout)

    def shutdown(self) -> None:
        """Detach from events and stop the owned executor."""
        self.detach()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # === Pass ===

    def _run_pass(self, trigger: Trigger) -> CleanupResult:
        """Run one pass. Always leaves the orchestrator IDLE."""
        result = CleanupResult(trigger=trigger)
        logger.info("Cleanup pass started (%s)", trigger.value)
        try:
            self._suspend_build_listener()
            self._execute(result)
        except Exception as e:
            logger.exception("Cleanup pass failed")
            result.error = str(e)
            result.reason = f"Cleanup failed: {e}"
            self._report_failure(result.reason)
        finally:
            self._last_result = result
            self._resume_build_listener()
            self._finish()
        logger.info("Cleanup pass finished (completed=%s)", result.completed)
        return result

    def _execute(self, result: CleanupResult) -> None:
        workspace = self._workspace.current_workspace()
        if workspace is None:
            result.reason = MSG_NO_WORKSPACE
            self._reporter.message(MSG_NO_WORKSPACE)
            return

        roots = project_roots(self._workspace.all_projects())
        if not roots:
            result.reason = f"There are no projects in {workspace.path}."
            self._reporter.message(result.reason)
            return

        rules = self._settings.snapshot()

        self._reporter.message(f"Deleting output folders in {workspace.path}...")
        result.first_sweep = self._sweep(roots, rules)

        if rules.run_host_native_clean:
            self._reporter.message(MSG_DEFAULT_CLEANUP)
            self._native_clean.run_default_clean()
            self._reporter.message(MSG_DEFAULT_CLEANUP_DONE)
            result.ran_native_clean = True

        self._reporter.message(MSG_DELETE_AUTO_CREATED)
        if self._settle_delay > 0:
            self._sleep(self._settle_delay)

        result.second_sweep = self._sweep(roots, rules)
        result.completed = True

        logger.info(
            "Cleanup of %s: %d deleted, %d skipped, %d failed",
            workspace.path,
            sum(r.deleted_count for r in result.reports),
            sum(r.skipped_count for r in result.reports),
            sum(r.failed_count for r in result.reports),
        )
        self._reporter.message(f"All files and folders in {workspace.path} have been deleted.")
        self._reporter.status_bar_message(f"{CAPTION} - Done!")

    def _sweep(self, roots: list[Path], rules: DeletionRuleSet) -> DeletionReport:
        folders = self._discovery.discover(roots, rules)
        logger.debug("Discovered %d candidate folders", len(folders))
        deleter = SafeDeleter(self._vcs, self._reporter, marker_suffix=self._marker_suffix)
        return deleter.delete_all(folders)

    def _report_failure(self, text: str) -> None:
        try:
            self._reporter.message(text)
        except Exception:
            logger.exception("Status reporter failed while reporting an error")
