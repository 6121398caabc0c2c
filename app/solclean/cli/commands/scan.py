"""Scan command implementation.

Lists the folders a cleanup would delete, without deleting anything.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from solclean.cleanup.discovery import FolderDiscovery
from solclean.cleanup.models import CandidateFolder
from solclean.cli.types import WorkspaceArgument, get_settings_store, load_settings_or_exit
from solclean.core.services import project_roots
from solclean.host.workspace import DirectoryWorkspaceProvider
from solclean.utils.formatting import console, print_info, print_success


class OutputFormat(str, Enum):
    """Output format options for scan."""

    TABLE = "table"
    JSON = "json"


def scan_folders(
    path: WorkspaceArgument = Path("."),
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show candidate folders with their file count and size."""
    settings = load_settings_or_exit(get_settings_store())
    provider = DirectoryWorkspaceProvider(path, settings.workspace.project_patterns)

    workspace = provider.current_workspace()
    if workspace is None:
        print_info("There is no open workspace.")
        return

    roots = project_roots(provider.all_projects())
    if not roots:
        print_info(f"There are no projects in {workspace.path}.")
        return

    discovery = FolderDiscovery(settings.cleanup.effective_external_root)
    folders = discovery.discover(roots, settings.rules)

    if output_format == OutputFormat.JSON:
        _print_json(folders)
        return

    if not folders:
        print_success("Workspace is clean. No output folders found.")
        return

    _print_table(folders)

    total_size = sum(_folder_stats(f.path)[1] for f in folders)
    console.print(
        f"\n[dim]Found {len(folders)} folder(s) in {len(roots)} project(s) "
        f"({_format_size(total_size)} total)[/dim]"
    )


# === Private helper functions ===


def _folder_stats(path: Path) -> tuple[int, int]:
    """Count files below path and sum their sizes."""
    count = 0
    size = 0
    for dirpath, _, filenames in os.walk(path):
        for name in filenames:
            count += 1
            try:
                size += os.lstat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return count, size


def _print_table(folders: list[CandidateFolder]) -> None:
    """Display candidate folders as a Rich table."""
    table = Table(
        title="Output Folders",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Folder", overflow="fold")
    table.add_column("Files", justify="right", width=8)
    table.add_column("Size", justify="right", width=10)

    for folder in folders:
        files, size = _folder_stats(folder.path)
        table.add_row(escape(str(folder.path)), str(files), _format_size(size))

    console.print(table)


def _print_json(folders: list[CandidateFolder]) -> None:
    """Display candidate folders as JSON."""
    data = []
    for folder in folders:
        files, size = _folder_stats(folder.path)
        data.append({"path": str(folder.path), "files": files, "size_bytes": size})
    console.print_json(json.dumps(data))


def _format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"
