"""Unit tests for the console status reporter."""

import io

from rich.console import Console

from solclean.cleanup.deleter import PROGRESS_LABEL
from solclean.core.theme import ThemeColors, get_rich_theme
from solclean.host.reporter import ConsoleReporter


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, theme=get_rich_theme(ThemeColors()), width=200)
    return console, buffer


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_message_is_printed_verbatim(self) -> None:
        """Messages are printed without markup interpretation."""
        console, buffer = _console()

        ConsoleReporter(console).message("File /w/bin/[x].dll has been deleted.")

        assert "File /w/bin/[x].dll has been deleted." in buffer.getvalue()

    def test_quiet_suppresses_messages(self) -> None:
        """Quiet mode prints no messages or status texts."""
        console, buffer = _console()
        reporter = ConsoleReporter(console, quiet=True, show_progress=False)

        reporter.message("Deleting folder /w/bin...")
        reporter.status_bar_message("Solution Cleanup - bin")

        assert buffer.getvalue() == ""

    def test_status_without_progress_is_printed(self) -> None:
        """Before any progress the status text goes to the console."""
        console, buffer = _console()

        ConsoleReporter(console).status_bar_message("Solution Cleanup - Done!")

        assert "Solution Cleanup - Done!" in buffer.getvalue()

    def test_progress_disabled(self) -> None:
        """With show_progress=False no progress display is started."""
        console, buffer = _console()
        reporter = ConsoleReporter(console, show_progress=False)

        reporter.progress(PROGRESS_LABEL, 1, 3)
        reporter.close()

        assert buffer.getvalue() == ""

    def test_progress_then_close(self) -> None:
        """Progress can be updated and the display stopped."""
        console, _ = _console()
        reporter = ConsoleReporter(console)

        reporter.status_bar_message("Solution Cleanup - bin")
        reporter.progress(PROGRESS_LABEL, 1, 2)
        reporter.status_bar_message("Solution Cleanup - obj")
        reporter.progress(PROGRESS_LABEL, 2, 2)
        reporter.close()
        reporter.close()
