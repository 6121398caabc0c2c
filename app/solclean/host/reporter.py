"""Console status reporter.

Prints output-pane messages to the rich console and shows per-folder
progress with a transient progress bar. All calls return immediately;
rich handles rendering on its own refresh thread.
"""

import threading

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn


class ConsoleReporter:
    """StatusReporter writing to a rich Console.

    Args:
        console: Console to print to.
        quiet: Suppress messages; progress and status are still shown.
        show_progress: Draw a progress bar for per-file progress.
    """

    def __init__(
        self,
        console: Console,
        *,
        quiet: bool = False,
        show_progress: bool = True,
    ) -> None:
        self._console = console
        self._quiet = quiet
        self._show_progress = show_progress
        self._lock = threading.Lock()
        self._progress: Progress | None = None
        self._task: TaskID | None = None
        self._status: str | None = None

    def message(self, text: str) -> None:
        if self._quiet:
            return
        self._console.print(escape(text), style="text", highlight=False)

    def progress(self, label: str, current: int, total: int) -> None:
        if not self._show_progress:
            return
        with self._lock:
            progress = self._ensure_progress()
            description = self._status or escape(label)
            if self._task is None:
                self._task = progress.add_task(description, total=total)
            progress.update(self._task, description=description, completed=current, total=total)

    def status_bar_message(self, text: str) -> None:
        with self._lock:
            self._status = escape(text)
            if self._progress is not None and self._task is not None:
                self._progress.update(self._task, description=self._status, completed=0)
                return
        if not self._quiet:
            self._console.print(escape(text), style="muted", highlight=False)

    def close(self) -> None:
        """Stop the progress display, if one was started."""
        with self._lock:
            if self._progress is not None:
                self._progress.stop()
            self._progress = None
            self._task = None
            self._status = None

    def _ensure_progress(self) -> Progress:
        if self._progress is None:
            self._progress = Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=self._console,
                transient=True,
            )
            self._progress.start()
        return self._progress
