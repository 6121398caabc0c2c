"""CLI package for solclean.

This package contains the Typer application and all subcommands.
"""

from solclean.cli.main import app

__all__ = ["app"]
