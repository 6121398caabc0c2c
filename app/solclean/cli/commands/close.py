"""Close command implementation.

Signals that the workspace is closing. A cleanup pass runs only when
run_on_workspace_close is enabled in the settings.
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


def close_workspace(
    ctx: typer.Context,
    path: WorkspaceArgument = Path("."),
    settle_delay: SettleDelayOption = None,
    no_vcs: NoVcsOption = False,
) -> None:
    """Run the on-close cleanup if rules.run_on_workspace_close is set."""
    host, orchestrator = open_host(ctx, path, settle_delay=settle_delay, no_vcs=no_vcs)
    try:
        host.close_workspace()
    finally:
        result = close_host(host, orchestrator)

    if result is None:
        print_info(
            "Cleanup on close is disabled "
            "(enable with: solclean config set rules.run_on_workspace_close true)."
        )
        return

    print_cleanup_summary(result)
    exit_for_result(result)
