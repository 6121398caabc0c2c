"""Settings commands.

Provides commands to show, create and change the settings file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape
from rich.table import Table

from solclean.cli.types import get_settings_store, load_settings_or_exit
from solclean.core.settings import (
    Settings,
    SettingsError,
    save_settings,
    set_setting,
    settings_to_dict,
)
from solclean.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and change cleanup settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    raw: Annotated[
        bool,
        typer.Option("--toml", help="Print the settings as TOML."),
    ] = False,
) -> None:
    """Show the effective settings."""
    store = get_settings_store()
    settings = load_settings_or_exit(store)

    if raw:
        console.print(escape(tomli_w.dumps(settings_to_dict(settings))), highlight=False)
        return

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")

    for section, values in settings.model_dump(mode="json").items():
        for key, value in values.items():
            shown = "-" if value is None else str(value)
            table.add_row(f"{section}.{key}", escape(shown))

    console.print(table)
    source = store.path if store.path.exists() else "defaults (no settings file)"
    console.print(f"\n[dim]Source: {escape(str(source))}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    store = get_settings_store()
    if store.path.exists() and not force:
        print_info(f"Settings already exist at {store.path} (use --force to overwrite).")
        return

    try:
        path = save_settings(Settings(), store.path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {path}")


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. rules.delete_test_results_folder.")],
    value: Annotated[str, typer.Argument(help="New value; lists are comma-separated.")],
) -> None:
    """Change a single setting."""
    store = get_settings_store()
    settings = load_settings_or_exit(store)

    try:
        updated = set_setting(settings, key, value)
        save_settings(updated, store.path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"{key} updated.")


@app.command()
def path() -> None:
    """Print the settings file path."""
    typer.echo(str(get_settings_store().path))
