"""CLI commands for solclean.

This package contains all subcommand implementations.
"""

from solclean.cli.commands import clean, close, config, run, scan

__all__ = ["clean", "close", "config", "run", "scan"]
