"""Unit tests for cli/display.py.

Tests for the summary printed after a cleanup pass.
"""

import io
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from rich.console import Console

from solclean.cleanup.models import DeletionOutcome, DeletionReport, ItemType, OutcomeStatus
from solclean.cli.display import exit_for_result, print_cleanup_summary
from solclean.core.orchestrator import CleanupResult, Trigger
from solclean.core.theme import get_theme


@pytest.fixture
def output() -> Iterator[io.StringIO]:
    """Capture everything the display module prints."""
    buffer = io.StringIO()
    console = Console(file=buffer, theme=get_theme(), width=200)
    with (
        patch("solclean.cli.display.console", console),
        patch("solclean.utils.formatting.console", console),
        patch("solclean.utils.formatting.err_console", console),
    ):
        yield buffer


def _report(*statuses: OutcomeStatus) -> DeletionReport:
    report = DeletionReport()
    for idx, status in enumerate(statuses):
        error = "Permission denied" if status == OutcomeStatus.FAILED_IO else None
        report.add(DeletionOutcome(Path(f"/w/bin/f{idx}.dll"), ItemType.FILE, status, error))
    return report


class TestPrintCleanupSummary:
    """Tests for print_cleanup_summary."""

    def test_all_deleted(self, output: io.StringIO) -> None:
        """A clean pass prints a single success line."""
        result = CleanupResult(
            trigger=Trigger.MANUAL,
            first_sweep=_report(OutcomeStatus.DELETED, OutcomeStatus.DELETED),
            second_sweep=_report(OutcomeStatus.DELETED),
            completed=True,
        )

        print_cleanup_summary(result)

        assert "All 3 item(s) deleted." in output.getvalue()
        assert "Kept Items" not in output.getvalue()

    def test_kept_items_are_listed(self, output: io.StringIO) -> None:
        """Skipped items appear in the kept table."""
        result = CleanupResult(
            trigger=Trigger.MANUAL,
            first_sweep=_report(OutcomeStatus.DELETED, OutcomeStatus.SKIPPED_MARKER_FILE),
            second_sweep=_report(),
            completed=True,
        )

        print_cleanup_summary(result)

        text = output.getvalue()
        assert "Kept Items" in text
        assert "/w/bin/f1.dll" in text
        assert "1 item(s) deleted, 1 kept." in text

    def test_failures_are_counted(self, output: io.StringIO) -> None:
        """Failed items are shown with their error."""
        result = CleanupResult(
            trigger=Trigger.MANUAL,
            first_sweep=_report(OutcomeStatus.DELETED, OutcomeStatus.FAILED_IO),
            completed=True,
        )

        print_cleanup_summary(result)

        text = output.getvalue()
        assert "Permission denied" in text
        assert "1 failed" in text

    def test_early_exit_is_informational(self, output: io.StringIO) -> None:
        """A pass that stopped early prints its reason."""
        result = CleanupResult(trigger=Trigger.MANUAL, reason="There is no open workspace.")

        print_cleanup_summary(result)

        assert "There is no open workspace." in output.getvalue()

    def test_error(self, output: io.StringIO) -> None:
        """An unexpected failure is printed as an error."""
        result = CleanupResult(
            trigger=Trigger.BUILD_FINISHED, error="boom", reason="Cleanup failed: boom"
        )

        print_cleanup_summary(result)

        assert "Error: Cleanup failed: boom" in output.getvalue()


class TestExitForResult:
    """Tests for exit_for_result."""

    def test_success_does_not_exit(self) -> None:
        """No failures, no exit."""
        exit_for_result(CleanupResult(trigger=Trigger.MANUAL, completed=True))
        exit_for_result(None)

    def test_failures_exit_with_one(self) -> None:
        """Any failed item exits with code 1."""
        result = CleanupResult(trigger=Trigger.MANUAL, first_sweep=_report(OutcomeStatus.FAILED_IO))

        with pytest.raises(typer.Exit) as exc_info:
            exit_for_result(result)

        assert exc_info.value.exit_code == 1
