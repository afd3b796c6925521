"""Shared Rich consoles and message helpers.

Results go to ``console`` (stdout); warnings, errors and log records go
to ``err_console`` (stderr). Messages are escaped before printing, since
part file names may contain square brackets.
"""

import sys

from rich.console import Console
from rich.markup import escape

from partsweep.core.theme import get_theme


def _color_system() -> str | None:
    """Force truecolor on a terminal so hex theme colours render exactly."""
    return "truecolor" if sys.stdout.isatty() else None


console = Console(theme=get_theme(), color_system=_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_color_system())


def format_size(size_bytes: int | None) -> str:
    """Render a byte count with a binary unit, e.g. "1.5 KB"."""
    if not size_bytes:
        return "0 B"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def print_info(message: str) -> None:
    """Print an informational line to stdout."""
    console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    """Print a success line to stdout."""
    console.print(f"[success]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning line to stderr."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error line to stderr."""
    err_console.print(f"[error]Error:[/] {escape(message)}")
