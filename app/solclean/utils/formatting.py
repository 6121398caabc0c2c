"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from solclean.cleanup.models import DeletionOutcome, OutcomeStatus
from solclean.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


_STATUS_MARKUP: dict[OutcomeStatus, str] = {
    OutcomeStatus.DELETED: "[deleted]deleted[/]",
    OutcomeStatus.SKIPPED_MARKER_FILE: "[skipped]marker[/]",
    OutcomeStatus.SKIPPED_VERSION_CONTROLLED: "[skipped]tracked[/]",
    OutcomeStatus.FAILED_IO: "[error]failed[/]",
}


def format_outcome_status(status: OutcomeStatus) -> str:
    """Format an outcome status with color markup."""
    return _STATUS_MARKUP[status]


def create_outcome_table(outcomes: list[DeletionOutcome], title: str = "Kept Items") -> Table:
    """Create a table of deletion outcomes.

    Args:
        outcomes: Outcomes to list, usually the skipped and failed ones.
        title: Table title.

    Returns:
        Rich Table with Status, Type, Path and Details columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Type", width=6)
    table.add_column("Path", overflow="fold")
    table.add_column("Details", style="muted")

    for outcome in outcomes:
        table.add_row(
            format_outcome_status(outcome.status),
            outcome.item_type.value,
            escape(str(outcome.path)),
            escape(outcome.error or ""),
        )

    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
