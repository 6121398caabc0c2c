"""Cleanup engine.

This module provides folder discovery, the safe two-phase deleter,
deletion rules and the models passed between them.
"""

from solclean.cleanup.deleter import SafeDeleter
from solclean.cleanup.discovery import FolderDiscovery
from solclean.cleanup.models import (
    CandidateFolder,
    DeletionOutcome,
    DeletionReport,
    ItemType,
    OutcomeStatus,
)
from solclean.cleanup.paths import PathComparer, path_identity, paths_equal
from solclean.cleanup.rules import DeletionRuleSet

__all__ = [
    "CandidateFolder",
    "DeletionOutcome",
    "DeletionReport",
    "DeletionRuleSet",
    "FolderDiscovery",
    "ItemType",
    "OutcomeStatus",
    "PathComparer",
    "SafeDeleter",
    "path_identity",
    "paths_equal",
]
