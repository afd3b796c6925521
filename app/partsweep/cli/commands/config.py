"""Configuration commands.

Provides commands to show the effective configuration and to write a
default configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from partsweep.cli.types import ConfigOption, resolve_config
from partsweep.core.config import (
    ConfigError,
    config_to_dict,
    get_default_config,
    save_config,
)
from partsweep.core.paths import get_config_path
from partsweep.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the configuration.",
    no_args_is_help=True,
)


@app.command()
def show(config_path: ConfigOption = None) -> None:
    """Print the effective configuration as TOML."""
    config = resolve_config(config_path)
    path = config_path or get_config_path()
    source = str(path) if path.exists() else "built-in defaults"
    print_info(f"# Source: {source}")
    typer.echo(tomli_w.dumps(config_to_dict(config)))


@app.command()
def init(
    config_path: ConfigOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the default configuration file."""
    path: Path = config_path or get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(get_default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
