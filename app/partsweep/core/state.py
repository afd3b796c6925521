"""Persistent history of committed cleanup runs.

History is a JSON Lines file in the XDG state directory. Each committed
run that deleted something appends one line; nothing is ever rewritten.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from partsweep.core.paths import HISTORY_FILENAME, ensure_state_dir, get_history_path
from partsweep.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends the cleanup history file.

    Args:
        state_dir: Directory holding history.jsonl. Defaults to the XDG
            state directory (~/.local/state/partsweep).
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        self._custom_dir = state_dir

    @property
    def history_path(self) -> Path:
        """Path to the history file."""
        if self._custom_dir is None:
            return get_history_path()
        return self._custom_dir / HISTORY_FILENAME

    def record_action(self, entry: HistoryEntry) -> None:
        """Append one entry to the history file.

        Raises:
            RuntimeError: If the default state directory cannot be created.
            OSError: If the history file cannot be written.
        """
        if self._custom_dir is None:
            ensure_state_dir()
        else:
            self._custom_dir.mkdir(parents=True, exist_ok=True)

        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Return recorded entries, newest first.

        Args:
            limit: Maximum number of entries to return, or None for all.
        """
        entries = list(self._iter_entries())
        entries.reverse()
        return entries if limit is None else entries[:limit]

    def get_entry_by_id(self, entry_id: str) -> HistoryEntry | None:
        """Find the single entry whose ID starts with entry_id.

        Returns:
            The matching entry, or None if no entry or several entries match.
        """
        matches = [entry for entry in self._iter_entries() if entry.id.startswith(entry_id)]
        return matches[0] if len(matches) == 1 else None

    def _iter_entries(self) -> Iterator[HistoryEntry]:
        """Yield entries in file order, skipping blank and corrupt lines."""
        if not self.history_path.exists():
            return

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    entry = HistoryEntry.from_json_line(line)
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)
                    continue
                yield entry
