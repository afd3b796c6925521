"""CLI package for partsweep.

This package contains the Typer application and all subcommands.
"""

from partsweep.cli.main import app

__all__ = ["app"]
