"""Run command implementation.

Starts a cleanup pass for a workspace right away.
"""

from pathlib import Path

import typer

from solclean.cli.display import exit_for_result, print_cleanup_summary
from solclean.cli.types import (
    NoVcsOption,
    SettleDelayOption,
    WorkspaceArgument,
    close_host,
    open_host,
)


def run_cleanup(
    ctx: typer.Context,
    path: WorkspaceArgument = Path("."),
    settle_delay: SettleDelayOption = None,
    no_vcs: NoVcsOption = False,
) -> None:
    """Delete output folders, settle, then delete recreated files."""
    host, orchestrator = open_host(ctx, path, settle_delay=settle_delay, no_vcs=no_vcs)
    try:
        orchestrator.run()
    finally:
        result = close_host(host, orchestrator)

    if result is None:
        return

    print_cleanup_summary(result)
    exit_for_result(result)
