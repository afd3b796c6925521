"""Shared Rich display functions for reconciliation passes.

Provides table builders and summary printers used by the scan and
clean commands.
"""

import json
import os

import typer
from rich.markup import escape
from rich.table import Table

from partsweep.models.report import ReconciliationReport
from partsweep.parts.cleanup import CleanupRun
from partsweep.parts.models import DisposalOutcome, DisposalResult
from partsweep.utils.formatting import console, format_size, print_success, print_warning


def _file_size(path: str) -> int | None:
    """Get the size of a part file, or None if it cannot be read."""
    try:
        return os.stat(path).st_size
    except OSError:
        return None


def create_orphans_table(orphans: list[str], title: str = "Orphaned Part Files") -> Table:
    """Create a Rich table listing orphaned part files.

    Args:
        orphans: Canonical paths of orphaned part files.
        title: Table title.

    Returns:
        Rich Table with Path and Size columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="part.path", overflow="fold")
    table.add_column("Size", style="part.size", justify="right", width=10)

    for path in orphans:
        table.add_row(escape(path), format_size(_file_size(path)))

    return table


def create_results_table(results: list[DisposalResult]) -> Table:
    """Create a Rich table displaying per-path disposal results.

    Args:
        results: Disposal results to display.

    Returns:
        Rich Table with Status, Path and Details columns.
    """
    table = Table(
        title="Disposal Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=12)
    table.add_column("Path", overflow="fold")
    table.add_column("Details", style="muted")

    for result in results:
        if result.outcome is DisposalOutcome.DELETED:
            status, detail = "[success]deleted[/]", ""
        elif result.outcome is DisposalOutcome.WOULD_DELETE:
            status, detail = "[simulated]dry-run[/]", "Would delete"
        elif result.outcome is DisposalOutcome.MISSING:
            status, detail = "[warning]missing[/]", "Already gone"
        else:
            detail = escape(result.error or "Unknown error")
            status = f"[error]{result.outcome.value}[/]"
        table.add_row(status, escape(result.path), detail)

    return table


def print_report(report: ReconciliationReport, simulated: bool) -> None:
    """Print the three counts of a reconciliation pass."""
    action = "would be deleted" if simulated else "deleted"
    console.print(
        f"\nPart files: [info]{report.part_file_count}[/]  "
        f"referenced: [referenced]{report.part_table_entry_count}[/]  "
        f"orphaned: [orphan]{report.orphan_count}[/]  "
        f"{action}: [info]{report.deleted_count}[/]"
    )


def print_run_summary(run: CleanupRun) -> None:
    """Print a closing line for a cleanup run."""
    failures = run.failures
    if failures:
        print_warning(f"{run.report.deleted_count} disposed, {len(failures)} failed")
    elif run.report.deleted_count == 0:
        print_success("Parts directory is clean. Nothing to dispose.")
    else:
        print_success(f"All {run.report.deleted_count} orphaned part file(s) handled.")


def echo_run_json(run: CleanupRun) -> None:
    """Write a cleanup run as JSON to stdout for scripting."""
    data = {
        "mode": run.mode.value,
        "report": run.report.to_dict(),
        "orphans": sorted(run.orphans),
        "results": [
            {"path": r.path, "outcome": r.outcome.value, "error": r.error} for r in run.results
        ],
    }
    typer.echo(json.dumps(data, indent=2))
