"""Shared Rich display functions for cleanup results.

Provides the summary printed after a cleanup pass by the run, clean
and close commands.
"""

import typer

from solclean.core.orchestrator import CleanupResult
from solclean.utils.formatting import (
    console,
    create_outcome_table,
    print_error,
    print_info,
    print_success,
)


def print_cleanup_summary(result: CleanupResult) -> None:
    """Print what a pass deleted and why items were kept.

    Skipped and failed items of both sweeps are listed in a table.
    Early exits (no workspace, no projects) are informational.

    Args:
        result: Result of the pass.
    """
    if result.error is not None:
        print_error(result.reason or result.error)
        return

    if not result.completed:
        print_info(result.reason or "Cleanup did not run.")
        return

    kept = [o for report in result.reports for o in report.outcomes if not o.deleted]
    if kept:
        console.print(create_outcome_table(kept))

    deleted = sum(r.deleted_count for r in result.reports)
    skipped = sum(r.skipped_count for r in result.reports)
    failed = sum(r.failed_count for r in result.reports)

    if failed:
        console.print(
            f"\n[success]{deleted} deleted[/success], [skipped]{skipped} kept[/skipped], "
            f"[error]{failed} failed[/error]"
        )
    elif skipped:
        print_success(f"{deleted} item(s) deleted, {skipped} kept.")
    else:
        print_success(f"All {deleted} item(s) deleted.")


def exit_for_result(result: CleanupResult | None) -> None:
    """Exit with code 1 when the pass failed or any item failed.

    Raises:
        typer.Exit: With code 1 on failures.
    """
    if result is not None and result.has_failures:
        raise typer.Exit(code=1)
