"""Path identity helpers.

Two paths denote the same folder when their normalized absolute forms
are equal. Case folding follows the host filesystem rules through
``os.path.normcase`` (case-insensitive on Windows, exact elsewhere).
"""

import os
from pathlib import Path

PathLike = str | os.PathLike[str]


def path_identity(path: PathLike) -> str:
    """Return the normalized absolute form of a path.

    Purely lexical: the filesystem is never consulted, so symlinks
    are not resolved and missing paths are fine.

    Args:
        path: Absolute or relative filesystem path.

    Returns:
        Normalized absolute path string usable as a deduplication key.
    """
    return os.path.normcase(os.path.abspath(os.fspath(path)))


def paths_equal(a: PathLike, b: PathLike) -> bool:
    """Check whether two paths share the same identity."""
    return path_identity(a) == path_identity(b)


class PathComparer:
    """Equality comparer for filesystem paths.

    Wraps :func:`path_identity` and :func:`paths_equal` for callers that
    take a comparer object rather than plain functions.
    """

    def equals(self, a: PathLike, b: PathLike) -> bool:
        return paths_equal(a, b)

    def identity(self, path: PathLike) -> str:
        return path_identity(path)

    def dedupe(self, paths: list[Path]) -> list[Path]:
        """Drop paths whose identity was already seen, keeping order."""
        seen: set[str] = set()
        unique: list[Path] = []
        for path in paths:
            key = self.identity(path)
            if key in seen:
                continue
            seen.add(key)
            unique.append(path)
        return unique
