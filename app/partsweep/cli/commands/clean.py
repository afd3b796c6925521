"""Clean command implementation.

Deletes part files that no row of the message store references, after
showing the planned deletions and asking for confirmation.
"""

from typing import Annotated

import typer

from partsweep.cli.display import (
    create_orphans_table,
    create_results_table,
    print_report,
    print_run_summary,
)
from partsweep.cli.types import (
    ConfigOption,
    DatabaseOption,
    PartsDirOption,
    open_database,
    resolve_config,
    run_pass,
)
from partsweep.parts.history import record_part_deletions
from partsweep.parts.models import DisposalMode
from partsweep.parts.references import ReferenceQueryError
from partsweep.utils.formatting import console, print_error, print_info, print_warning

app = typer.Typer(
    help="Delete orphaned part files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_parts(
    parts_dir: PartsDirOption = None,
    database: DatabaseOption = None,
    config_path: ConfigOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete part files that no message references."""
    config = resolve_config(config_path, parts_dir, database)
    mode = DisposalMode.from_dry_run(dry_run)

    try:
        with open_database(config) as store:
            if mode is DisposalMode.COMMIT and not yes:
                preview = run_pass(config, store, DisposalMode.SIMULATE)
                if not preview.orphans:
                    print_run_summary(preview)
                    print_report(preview.report, simulated=True)
                    return

                console.print(
                    create_orphans_table(sorted(preview.orphans), title="Planned Deletions")
                )
                confirmed = typer.confirm(
                    f"\nProceed with deleting {len(preview.orphans)} part file(s)?",
                    default=False,
                )
                if not confirmed:
                    print_info("Aborted.")
                    raise typer.Exit(code=0)

            # Confirmed deletions run as a fresh pass against the current store
            run = run_pass(config, store, mode)
    except ReferenceQueryError as e:
        print_error(f"Cannot read part references, aborting: {e}")
        raise typer.Exit(code=2) from e

    if run.results:
        console.print(create_results_table(list(run.results)))
    print_report(run.report, simulated=mode is DisposalMode.SIMULATE)
    print_run_summary(run)

    if mode is DisposalMode.COMMIT:
        try:
            if record_part_deletions(run, str(config.parts_dir)) is not None:
                print_info("Deletions recorded to history.")
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if run.failures:
        raise typer.Exit(code=1)
