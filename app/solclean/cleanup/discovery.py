"""Candidate folder discovery.

Walks project roots for folders whose names match the categories
enabled in a DeletionRuleSet and adds the external (profile) folders.
Results are rebuilt from the filesystem on every call.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from solclean.cleanup.models import CandidateFolder
from solclean.cleanup.paths import PathComparer
from solclean.cleanup.rules import DeletionRuleSet

logger = logging.getLogger(__name__)


class FolderDiscovery:
    """Finds folders eligible for deletion.

    Args:
        external_root: Directory holding the external Logs and
            TraceLogFiles folders. If None, external folders are never
            discovered.
        comparer: Path comparer used for deduplication.
    """

    def __init__(
        self,
        external_root: Path | None = None,
        comparer: PathComparer | None = None,
    ) -> None:
        self._external_root = external_root
        self._comparer = comparer or PathComparer()

    @property
    def external_root(self) -> Path | None:
        return self._external_root

    def discover(
        self,
        project_roots: Iterable[Path],
        rules: DeletionRuleSet,
    ) -> list[CandidateFolder]:
        """Build the deduplicated list of existing candidate folders.

        Project roots that do not exist are skipped silently and symlinks
        to folders are never candidates. Ordering is deterministic: roots
        in the given order, matches in sorted walk order, external folders
        last.

        Args:
            project_roots: Project root directories to search.
            rules: Rule snapshot selecting the folder categories.

        Returns:
            Candidate folders, each existing at discovery time.
        """
        names = rules.project_folder_names()
        found: list[Path] = []

        if names:
            for root in project_roots:
                if not root.is_dir():
                    logger.debug("Skipping missing project root: %s", root)
                    continue
                found.extend(self._find_named_folders(root, names))

        found.extend(self._external_folders(rules))

        return [
            CandidateFolder(path=Path(os.path.abspath(path)), exists=True)
            for path in self._comparer.dedupe(found)
            if path.is_dir() and not path.is_symlink()
        ]

    def _find_named_folders(self, root: Path, names: frozenset[str]) -> Iterator[Path]:
        """Yield folders under root whose name is in names.

        Matching is by exact name at any depth. A matched folder is not
        descended into since its subtree is covered by the match.
        Symlinked directories are neither followed nor matched.
        """

        def _on_error(error: OSError) -> None:
            logger.warning("Cannot scan %s: %s", error.filename, error.strerror)

        for dirpath, dirnames, _ in os.walk(root, onerror=_on_error):
            dirnames.sort()
            keep: list[str] = []
            for dirname in dirnames:
                if dirname in names:
                    yield Path(dirpath) / dirname
                else:
                    keep.append(dirname)
            dirnames[:] = keep

    def _external_folders(self, rules: DeletionRuleSet) -> list[Path]:
        if self._external_root is None:
            return []
        return [self._external_root / name for name in rules.external_folder_names()]
