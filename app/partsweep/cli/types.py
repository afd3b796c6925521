"""Shared types and utilities for CLI commands.

This module provides the option types and the configuration/store
helpers shared by the scan and clean commands.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from partsweep.core.config import ConfigError, PartsweepConfig, load_config_or_default
from partsweep.parts.cleanup import CleanupRun, cleanup_dangling_parts
from partsweep.parts.models import DisposalMode
from partsweep.parts.references import PartsDatabase
from partsweep.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


# Options shared by commands that run a reconciliation pass
PartsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--parts-dir",
        "-p",
        help="Attachment directory (overrides config).",
    ),
]
DatabaseOption = Annotated[
    Path | None,
    typer.Option(
        "--database",
        "-d",
        help="SQLite message store (overrides config).",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file to read instead of the default.",
    ),
]


def resolve_config(
    config_path: Path | None = None,
    parts_dir: Path | None = None,
    database: Path | None = None,
) -> PartsweepConfig:
    """Load the configuration and apply command-line overrides.

    Exits with code 1 if the config file exists but is invalid.

    Args:
        config_path: Config file to read. Defaults to the user config path.
        parts_dir: Override for the parts directory.
        database: Override for the message store path.

    Returns:
        Effective configuration for this invocation.
    """
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    overrides: dict[str, object] = {}
    if parts_dir is not None:
        overrides["parts_dir"] = parts_dir
    if database is not None:
        overrides["database"] = database

    return config.model_copy(update=overrides) if overrides else config


def open_database(config: PartsweepConfig) -> PartsDatabase:
    """Create the reference store handle described by a configuration."""
    return PartsDatabase(config.database, config.reference_specs())


def run_pass(config: PartsweepConfig, store: PartsDatabase, mode: DisposalMode) -> CleanupRun:
    """Run one reconciliation pass with the configured options.

    Raises:
        ReferenceQueryError: If recorded references cannot be read.
    """
    return cleanup_dangling_parts(
        config.parts_dir,
        store,
        mode,
        canonicalize=config.canonicalize,
        ignore_suffixes=tuple(config.ignore_suffixes),
    )
