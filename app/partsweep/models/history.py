"""History entry model for recorded cleanup runs.

This module defines the data structure written to the history file
each time a committed cleanup run deletes part files, giving an audit
trail of what was reclaimed and when.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from partsweep.models.report import ReconciliationReport


class HistoryActionType(str, Enum):
    """Type of action recorded in history.

    Attributes:
        PARTS_DELETE: Orphaned part files were deleted by a committed run.
    """

    PARTS_DELETE = "parts_delete"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single cleanup run in history.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        action_type: Type of action.
        paths: Part files deleted by the run.
        report: Counts reported by the run.
        success: Whether every disposal in the run succeeded.
        metadata: Additional context (parts directory, command, etc.).
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    paths: tuple[str, ...]
    report: ReconciliationReport
    success: bool = True
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        try:
            datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        except ValueError as e:
            msg = f"Timestamp is not ISO 8601: {self.timestamp!r}"
            raise ValueError(msg) from e
        if not self.paths:
            msg = "History entry must have at least one path"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "paths": list(self.paths),
            "report": self.report.to_dict(),
            "success": self.success,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If action_type or report data is invalid.
        """
        report = data["report"]
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            paths=tuple(data["paths"]),
            report=ReconciliationReport(
                part_file_count=report["part_file_count"],
                part_table_entry_count=report["part_table_entry_count"],
                deleted_count=report["deleted_count"],
            ),
            success=data.get("success", True),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        return cls.from_dict(data)


def create_history_entry(
    paths: list[str],
    report: ReconciliationReport,
    success: bool = True,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Factory function to create a new HistoryEntry.

    Automatically generates a unique ID and current timestamp.

    Args:
        paths: Part files deleted by the run.
        report: Counts reported by the run.
        success: Whether every disposal in the run succeeded.
        metadata: Optional additional context.

    Raises:
        ValueError: If paths list is empty.
    """
    if not paths:
        msg = "Cannot create history entry with no paths"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=HistoryActionType.PARTS_DELETE,
        paths=tuple(paths),
        report=report,
        success=success,
        metadata=metadata or {},
    )
