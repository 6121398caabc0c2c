"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from solclean import __version__
from solclean.cli.commands import clean, close, config, run, scan
from solclean.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="solclean",
    help="Remove build output and cache folders from a workspace.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"solclean version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich on stderr.

    Verbose mode logs everything from DEBUG up, otherwise only warnings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress per-item messages.",
        ),
    ] = False,
) -> None:
    """solclean - Remove build output and cache folders from a workspace.

    Deletes bin/obj and other regenerable folders of every project,
    keeping files under version control, then sweeps again after a
    short delay to catch files recreated by background tooling.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command("run", help="Run a cleanup of the workspace now.")(run.run_cleanup)
app.command("scan", help="List the folders a cleanup would delete.")(scan.scan_folders)
app.command("clean", help="Run the native clean, followed by a cleanup.")(clean.clean_workspace)
app.command("close", help="Close the workspace, cleaning up if configured.")(close.close_workspace)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
