"""Parts domain models for orphan reconciliation and disposal.

This module defines the data structures passed between the parts
scanner, the reference extractor, the reconciliation engine and the
disposer: reference column descriptors, the execution mode, and the
per-path disposal outcome.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DisposalMode(str, Enum):
    """How the disposer treats orphaned part files.

    Attributes:
        SIMULATE: Report what would be deleted; the filesystem is never touched.
        COMMIT: Delete orphaned part files.
    """

    SIMULATE = "simulate"
    COMMIT = "commit"

    @classmethod
    def from_dry_run(cls, dry_run: bool) -> DisposalMode:
        """Map a CLI-style dry-run flag to a disposal mode."""
        return cls.SIMULATE if dry_run else cls.COMMIT


class DisposalOutcome(str, Enum):
    """Outcome of disposing a single orphan candidate.

    Attributes:
        DELETED: The file was removed.
        WOULD_DELETE: Simulated; the file exists and would have been removed.
        MISSING: The file was already gone when disposal reached it.
        REFUSED: The path lies outside the parts directory and was not touched.
        FAILED: Removal was attempted and raised an OS error.
    """

    DELETED = "deleted"
    WOULD_DELETE = "would_delete"
    MISSING = "missing"
    REFUSED = "refused"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ReferenceSpec:
    """A table column that records attachment file paths.

    Attributes:
        table: Name of the table holding attachment rows (e.g., "part").
        column: Name of the column holding the file path (e.g., "_data").
    """

    table: str
    column: str

    def __post_init__(self) -> None:
        """Validate that table and column are plain SQL identifiers."""
        for label, value in (("table", self.table), ("column", self.column)):
            if not _IDENTIFIER_RE.match(value):
                msg = f"Invalid {label} name: {value!r}"
                raise ValueError(msg)

    def select_sql(self) -> str:
        """Build the query selecting every non-empty path in this column."""
        column = f'"{self.column}"'
        return (
            f'SELECT {column} FROM "{self.table}" '
            f"WHERE {column} IS NOT NULL AND {column} <> ''"
        )

    def __str__(self) -> str:
        return f"{self.table}.{self.column}"


# The MMS part table stores each attachment's file location in "_data"
PART_DATA_REFERENCE = ReferenceSpec(table="part", column="_data")


@dataclass(frozen=True, slots=True)
class DisposalResult:
    """Result of disposing a single orphaned part file.

    Attributes:
        path: Canonical path that was operated on.
        outcome: What happened to the path.
        error: Error message for refused or failed paths, None otherwise.
    """

    path: str
    outcome: DisposalOutcome
    error: str | None = None

    @property
    def counted(self) -> bool:
        """Whether this result counts toward the disposed total."""
        return self.outcome in (DisposalOutcome.DELETED, DisposalOutcome.WOULD_DELETE)

    @property
    def failed(self) -> bool:
        """Whether this result represents an error the caller should surface."""
        return self.outcome in (DisposalOutcome.REFUSED, DisposalOutcome.FAILED)
