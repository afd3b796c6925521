"""Scan command implementation.

Runs a simulated reconciliation pass and lists the part files that no
row of the message store references. Nothing is deleted.
"""

from typing import Annotated

import typer

from partsweep.cli.display import create_orphans_table, echo_run_json, print_report
from partsweep.cli.types import (
    ConfigOption,
    DatabaseOption,
    OutputFormat,
    PartsDirOption,
    open_database,
    resolve_config,
    run_pass,
)
from partsweep.parts.models import DisposalMode
from partsweep.parts.references import ReferenceQueryError
from partsweep.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Find orphaned part files without deleting them.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_parts(
    parts_dir: PartsDirOption = None,
    database: DatabaseOption = None,
    config_path: ConfigOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Limit number of listed orphans.",
        ),
    ] = None,
) -> None:
    """Reconcile the parts directory against the message store (dry-run)."""
    config = resolve_config(config_path, parts_dir, database)

    try:
        with open_database(config) as store:
            run = run_pass(config, store, DisposalMode.SIMULATE)
    except ReferenceQueryError as e:
        print_error(f"Cannot read part references, aborting: {e}")
        raise typer.Exit(code=2) from e

    if output_format == OutputFormat.JSON:
        echo_run_json(run)
        return

    if not run.orphans:
        print_success("Parts directory is clean. No orphaned part files found.")
        print_report(run.report, simulated=True)
        return

    orphans = sorted(run.orphans)
    display_orphans = orphans[:limit] if limit else orphans
    console.print(create_orphans_table(display_orphans))
    print_report(run.report, simulated=True)

    if limit and len(display_orphans) < len(orphans):
        console.print(
            f"[dim](showing {len(display_orphans)} of {len(orphans)}, limited to {limit})[/dim]"
        )
