"""Logging setup for the partsweep CLI.

Library modules only create module-level loggers; the CLI decides where
records go. Records are rendered through Rich on stderr so they never mix
with machine-readable output on stdout.
"""

import logging

from rich.logging import RichHandler

from partsweep.utils.formatting import err_console

# Handler installed by the last setup_logging() call
_handler: logging.Handler | None = None


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route log records to stderr through Rich.

    Safe to call repeatedly: the previously installed handler is replaced.

    Args:
        verbose: Log everything down to DEBUG.
        quiet: Only log errors. Ignored when verbose is set.
    """
    global _handler

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = RichHandler(console=err_console, show_path=False, markup=False)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    _handler.setLevel(level)
    root.addHandler(_handler)
    root.setLevel(level)
