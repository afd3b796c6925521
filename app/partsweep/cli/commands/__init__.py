"""CLI commands for partsweep.

This package contains all subcommand implementations.
"""

from partsweep.cli.commands import clean, config, history, scan

__all__ = ["clean", "config", "history", "scan"]
