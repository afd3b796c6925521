"""Data models for partsweep.

This module exports the report and history structures used throughout the application.
"""

from partsweep.models.history import HistoryActionType, HistoryEntry, create_history_entry
from partsweep.models.report import (
    DELETED_COUNT,
    PART_FILE_COUNT,
    PART_TABLE_ENTRY_COUNT,
    ReconciliationReport,
)

__all__ = [
    "DELETED_COUNT",
    "PART_FILE_COUNT",
    "PART_TABLE_ENTRY_COUNT",
    "HistoryActionType",
    "HistoryEntry",
    "ReconciliationReport",
    "create_history_entry",
]
