"""Safe two-phase folder deletion.

Phase A deletes the files below every candidate folder, leaving marker
files and version-controlled files in place. Phase B then prunes empty
folders bottom-up. Folders still holding skipped files stay standing.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from solclean.cleanup.models import (
    CandidateFolder,
    DeletionOutcome,
    DeletionReport,
    ItemType,
    OutcomeStatus,
)
from solclean.core.services import StatusReporter, VersionControlStatus

logger = logging.getLogger(__name__)

DEFAULT_MARKER_SUFFIX = ".refresh"
PROGRESS_LABEL = "Removing output folders"


class SafeDeleter:
    """Deletes the contents of candidate folders with safety skips.

    Args:
        vcs: Version control status used to protect tracked files.
        reporter: Status surface receiving messages and progress.
        marker_suffix: File name suffix of files that must be left alone.
    """

    def __init__(
        self,
        vcs: VersionControlStatus,
        reporter: StatusReporter,
        marker_suffix: str = DEFAULT_MARKER_SUFFIX,
    ) -> None:
        self._vcs = vcs
        self._reporter = reporter
        self._marker_suffix = marker_suffix

    def delete_all(self, folders: Sequence[CandidateFolder]) -> DeletionReport:
        """Delete files in all folders, then prune the emptied folders.

        Phase A runs for every folder before Phase B starts for any of
        them. A failure on one item never stops the others, and nothing
        is retried within one call.

        Args:
            folders: Candidate folders from discovery.

        Returns:
            DeletionReport with one outcome per file processed and per
            folder removal attempted.
        """
        report = DeletionReport()

        for folder in folders:
            self._sweep_files(folder.path, report)

        for folder in folders:
            self._prune_folder(folder.path, report)

        return report

    # === Phase A ===

    def _sweep_files(self, folder: Path, report: DeletionReport) -> None:
        if not folder.is_dir():
            logger.debug("Folder vanished before sweep: %s", folder)
            return

        files = self._list_files(folder)
        total = len(files)

        self._reporter.message(f"Deleting folder {folder}...")
        self._reporter.status_bar_message(f"Solution Cleanup - {folder.name}")

        for idx, file in enumerate(files, start=1):
            outcome = self._delete_file(file)
            report.add(outcome)
            self._reporter.message(self._describe(outcome))
            self._reporter.progress(PROGRESS_LABEL, idx, total)

    def _list_files(self, folder: Path) -> list[Path]:
        """List every file below folder once, before any deletion.

        Symlinks to directories are listed as files so that the link,
        never its target, gets removed.
        """
        files: list[Path] = []

        def _on_error(error: OSError) -> None:
            logger.warning("Cannot list %s: %s", error.filename, error.strerror)

        for dirpath, dirnames, filenames in os.walk(folder, onerror=_on_error):
            dirnames.sort()
            base = Path(dirpath)
            linked = [d for d in dirnames if (base / d).is_symlink()]
            files.extend(base / name for name in sorted(filenames + linked))
        return files

    def _delete_file(self, file: Path) -> DeletionOutcome:
        if file.name.endswith(self._marker_suffix):
            return DeletionOutcome(file, ItemType.FILE, OutcomeStatus.SKIPPED_MARKER_FILE)

        if self._is_controlled(file):
            return DeletionOutcome(file, ItemType.FILE, OutcomeStatus.SKIPPED_VERSION_CONTROLLED)

        try:
            file.unlink()
        except OSError as e:
            return DeletionOutcome(file, ItemType.FILE, OutcomeStatus.FAILED_IO, error=str(e))

        return DeletionOutcome(file, ItemType.FILE, OutcomeStatus.DELETED)

    def _is_controlled(self, file: Path) -> bool:
        # A file whose status cannot be determined is kept.
        try:
            return self._vcs.is_controlled(file)
        except Exception as e:
            logger.warning("Version control query failed for %s: %s", file, e)
            return True

    # === Phase B ===

    def _prune_folder(self, folder: Path, report: DeletionReport) -> None:
        """Remove folder and its subfolders if they end up empty, children first."""
        try:
            with os.scandir(folder) as it:
                subfolders = sorted(
                    Path(entry.path) for entry in it if entry.is_dir(follow_symlinks=False)
                )
        except FileNotFoundError:
            return
        except OSError as e:
            self._record_folder_failure(folder, e, report)
            return

        for subfolder in subfolders:
            self._prune_folder(subfolder, report)

        try:
            if any(folder.iterdir()):
                return
            folder.rmdir()
        except OSError as e:
            self._record_folder_failure(folder, e, report)
            return

        outcome = DeletionOutcome(folder, ItemType.FOLDER, OutcomeStatus.DELETED)
        report.add(outcome)
        self._reporter.message(self._describe(outcome))

    def _record_folder_failure(self, folder: Path, error: OSError, report: DeletionReport) -> None:
        outcome = DeletionOutcome(
            folder, ItemType.FOLDER, OutcomeStatus.FAILED_IO, error=str(error)
        )
        report.add(outcome)
        self._reporter.message(self._describe(outcome))

    def _describe(self, outcome: DeletionOutcome) -> str:
        """Render the output-pane line for an outcome."""
        kind = "File" if outcome.item_type == ItemType.FILE else "Folder"
        if outcome.status == OutcomeStatus.DELETED:
            return f"{kind} {outcome.path} has been deleted."
        if outcome.status == OutcomeStatus.SKIPPED_MARKER_FILE:
            return f"Can't delete {outcome.path}. This is a {self._marker_suffix} file."
        if outcome.status == OutcomeStatus.SKIPPED_VERSION_CONTROLLED:
            return f"Can't delete {outcome.path}. This file is under source control."
        return f"Error deleting {kind.lower()} {outcome.path}. {outcome.error}"
