"""Cleanup domain models.

This module defines the data structures passed between discovery,
deletion, and reporting: candidate folders, per-item deletion outcomes,
and the report aggregating them.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from solclean.cleanup.paths import path_identity


class ItemType(str, Enum):
    """Kind of filesystem item a deletion outcome refers to."""

    FILE = "file"
    FOLDER = "folder"


class OutcomeStatus(str, Enum):
    """Result of processing a single file or folder.

    Attributes:
        DELETED: The item was removed.
        SKIPPED_VERSION_CONTROLLED: The file is tracked by version control.
        SKIPPED_MARKER_FILE: The file carries the marker suffix.
        FAILED_IO: Removal raised an OS error; the item is still in place.
    """

    DELETED = "deleted"
    SKIPPED_VERSION_CONTROLLED = "skipped_vcs"
    SKIPPED_MARKER_FILE = "skipped_marker"
    FAILED_IO = "failed"


@dataclass(frozen=True, slots=True)
class CandidateFolder:
    """A folder selected for cleanup during one discovery pass.

    Attributes:
        path: Absolute folder path.
        exists: Whether the folder existed when it was discovered.
    """

    path: Path
    exists: bool = True

    @property
    def identity(self) -> str:
        """Normalized absolute path used for equality across candidates."""
        return path_identity(self.path)

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Outcome of a single file or folder deletion attempt.

    Attributes:
        path: Absolute path of the item.
        item_type: Whether the item is a file or a folder.
        status: What happened to the item.
        error: OS error message for FAILED_IO outcomes, None otherwise.
    """

    path: Path
    item_type: ItemType
    status: OutcomeStatus
    error: str | None = None

    @property
    def deleted(self) -> bool:
        return self.status == OutcomeStatus.DELETED

    @property
    def skipped(self) -> bool:
        return self.status in (
            OutcomeStatus.SKIPPED_VERSION_CONTROLLED,
            OutcomeStatus.SKIPPED_MARKER_FILE,
        )

    @property
    def failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED_IO


@dataclass(slots=True)
class DeletionReport:
    """Outcomes of one ``SafeDeleter.delete_all`` call, in processing order."""

    outcomes: list[DeletionOutcome] = field(default_factory=list)

    def add(self, outcome: DeletionOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, status: OutcomeStatus) -> int:
        """Count outcomes with the given status."""
        return sum(1 for o in self.outcomes if o.status == status)

    def by_status(self, status: OutcomeStatus) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def deleted_count(self) -> int:
        return self.count(OutcomeStatus.DELETED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.skipped)

    @property
    def failed_count(self) -> int:
        return self.count(OutcomeStatus.FAILED_IO)

    @property
    def has_failures(self) -> bool:
        return any(o.failed for o in self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)
