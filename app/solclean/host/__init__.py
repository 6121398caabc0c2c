"""Local host adapters.

Implementations of the host service protocols for running solclean
against a directory from the command line.
"""

from solclean.host.local import LocalHost
from solclean.host.native import CommandCleanInvoker
from solclean.host.reporter import ConsoleReporter
from solclean.host.vcs import GitVersionControl, NullVersionControl, VersionControlError
from solclean.host.workspace import DirectoryWorkspaceProvider

__all__ = [
    "CommandCleanInvoker",
    "ConsoleReporter",
    "DirectoryWorkspaceProvider",
    "GitVersionControl",
    "LocalHost",
    "NullVersionControl",
    "VersionControlError",
]
