"""History command for viewing past cleanup runs.

This module provides the `partsweep history` command for viewing the
part files deleted by previous committed runs.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from partsweep.core.state import StateManager
from partsweep.models.history import HistoryEntry
from partsweep.utils.formatting import console, print_error, print_info

app = typer.Typer(
    name="history",
    help="View history of cleanup runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of cleanup runs.

    Examples:
        partsweep history              # Show last 20 runs
        partsweep history -n 50        # Show last 50 runs
        partsweep history --json       # JSON output for scripting
        partsweep history show 3f2a    # Paths deleted by one run
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        typer.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
    else:
        _print_table(entries)


@app.command()
def show(
    entry_id: Annotated[str, typer.Argument(help="History entry ID or unique prefix.")],
) -> None:
    """Show the part files deleted by one cleanup run."""
    entry = StateManager().get_entry_by_id(entry_id)
    if entry is None:
        print_error(f"No unique history entry matches '{entry_id}'.")
        raise typer.Exit(code=1)

    parts_dir = escape(str(entry.metadata.get("parts_dir", "-")))
    console.print(
        f"[header]{entry.id}[/]  {_format_timestamp(entry.timestamp)}  [muted]{parts_dir}[/]"
    )
    for path in entry.paths:
        console.print(f"  [orphan]-[/] {escape(path)}", soft_wrap=True)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as Rich table."""
    table = Table(title="Cleanup History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Found", justify="right")
    table.add_column("Referenced", justify="right", style="referenced")
    table.add_column("Deleted", justify="right", style="orphan")
    table.add_column("OK?")

    for entry in entries:
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            str(entry.report.part_file_count),
            str(entry.report.part_table_entry_count),
            str(entry.report.deleted_count),
            "[success]Yes[/]" if entry.success else "[error]No[/]",
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display (YYYY-MM-DD HH:MM)."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")
