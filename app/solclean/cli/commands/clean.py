"""Clean command implementation.

Runs the native clean command the way an IDE "Clean Solution" does.
The finished workspace clean then triggers a cleanup pass.
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
from solclean.utils.formatting import print_info


def clean_workspace(
    ctx: typer.Context,
    path: WorkspaceArgument = Path("."),
    settle_delay: SettleDelayOption = None,
    no_vcs: NoVcsOption = False,
) -> None:
    """Run the configured clean command, then clean up output folders."""
    host, orchestrator = open_host(ctx, path, settle_delay=settle_delay, no_vcs=no_vcs)
    try:
        command = " ".join(host.settings.cleanup.native_clean_command) or "default clean"
        print_info(f"Running {command}...")
        host.run_default_clean()
    finally:
        result = close_host(host, orchestrator)

    if result is None:
        return

    print_cleanup_summary(result)
    exit_for_result(result)
