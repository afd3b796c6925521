"""Reconciliation report model.

The report is the only externally observable output of a reconciliation
pass besides its effect on disk: how many part files were found, how
many of them are referenced by the message store, and how many were
disposed (or would have been, in a simulated run).
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass

# Accumulator keys filled by a reconciliation pass
PART_FILE_COUNT = "part_file_count"
PART_TABLE_ENTRY_COUNT = "part_table_entry_count"
DELETED_COUNT = "deleted_count"


@dataclass(frozen=True, slots=True)
class ReconciliationReport:
    """Counts produced by one reconciliation pass.

    Attributes:
        part_file_count: Part files found in the parts directory.
        part_table_entry_count: Part files matched by a reference row.
        deleted_count: Orphaned part files deleted, or that would have been
            deleted in a simulated run.
    """

    part_file_count: int
    part_table_entry_count: int
    deleted_count: int

    def __post_init__(self) -> None:
        """Validate the accounting identity of the report."""
        if min(self.part_file_count, self.part_table_entry_count, self.deleted_count) < 0:
            msg = f"Report counts cannot be negative: {self.to_dict()}"
            raise ValueError(msg)
        if self.part_table_entry_count > self.part_file_count:
            msg = (
                f"Referenced count {self.part_table_entry_count} exceeds "
                f"part file count {self.part_file_count}"
            )
            raise ValueError(msg)
        if self.deleted_count > self.orphan_count:
            msg = f"Deleted count {self.deleted_count} exceeds orphan count {self.orphan_count}"
            raise ValueError(msg)

    @property
    def orphan_count(self) -> int:
        """Number of part files no reference row points at."""
        return self.part_file_count - self.part_table_entry_count

    def to_dict(self) -> dict[str, int]:
        """Serialize the three counts under their accumulator keys."""
        return {
            PART_FILE_COUNT: self.part_file_count,
            PART_TABLE_ENTRY_COUNT: self.part_table_entry_count,
            DELETED_COUNT: self.deleted_count,
        }

    def apply_to(self, accumulator: MutableMapping[str, int]) -> None:
        """Write the counts into a caller-provided accumulator."""
        accumulator.update(self.to_dict())
