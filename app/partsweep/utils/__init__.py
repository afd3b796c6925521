"""Utility modules for partsweep.

This module exports commonly used utility functions.
"""

from partsweep.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from partsweep.utils.log import setup_logging

__all__ = [
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
