"""Shared types and utilities for CLI commands.

This module provides the argument types and the host setup used by
the run, clean and close commands to avoid code duplication.
"""

from pathlib import Path
from typing import Annotated

import typer

from solclean.core.orchestrator import CleanupOrchestrator, CleanupResult
from solclean.core.settings import Settings, SettingsError, TomlSettingsStore
from solclean.host.local import LocalHost
from solclean.utils.formatting import console, print_error

WorkspaceArgument = Annotated[
    Path,
    typer.Argument(
        help="Workspace directory or project file.",
        exists=True,
        resolve_path=True,
    ),
]

SettleDelayOption = Annotated[
    float | None,
    typer.Option(
        "--settle-delay",
        "-d",
        min=0,
        help="Seconds to wait before the second sweep (overrides settings).",
    ),
]

NoVcsOption = Annotated[
    bool,
    typer.Option("--no-vcs", help="Do not consult git before deleting files."),
]


def get_settings_store() -> TomlSettingsStore:
    """Get the settings store for the default settings path."""
    return TomlSettingsStore()


def load_settings_or_exit(store: TomlSettingsStore) -> Settings:
    """Load settings, exiting with code 1 if the file is invalid."""
    try:
        return store.load()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def is_quiet(ctx: typer.Context) -> bool:
    """Read the global --quiet flag from the context."""
    return bool(ctx.obj and ctx.obj.get("quiet", False))


def open_host(
    ctx: typer.Context,
    path: Path,
    *,
    settle_delay: float | None = None,
    no_vcs: bool = False,
) -> tuple[LocalHost, CleanupOrchestrator]:
    """Create the local host for path and an orchestrator attached to it.

    Args:
        ctx: Typer context carrying the global options.
        path: Workspace directory or project file.
        settle_delay: Override of the configured settle delay.
        no_vcs: Skip version control checks.

    Returns:
        Tuple of (host, orchestrator). Call close_host() when done.
    """
    store = get_settings_store()
    settings = load_settings_or_exit(store)
    host = LocalHost(path, settings, console, use_vcs=not no_vcs, quiet=is_quiet(ctx))
    orchestrator = host.create_orchestrator(store, settle_delay)
    return host, orchestrator


def close_host(host: LocalHost, orchestrator: CleanupOrchestrator) -> CleanupResult | None:
    """Wait for any started pass, then release the host.

    Returns:
        Result of the last pass, or None if no pass was started.
    """
    try:
        return orchestrator.wait()
    finally:
        host.reporter.close()
        orchestrator.shutdown()
