"""Parts cleanup history recording.

Records committed cleanup runs to the history file, giving an audit
trail of reclaimed part files.
"""

from partsweep.core.state import StateManager
from partsweep.models.history import HistoryEntry, create_history_entry
from partsweep.parts.cleanup import CleanupRun


def record_part_deletions(
    run: CleanupRun,
    parts_dir: str,
    command: str = "partsweep clean",
    state: StateManager | None = None,
) -> HistoryEntry | None:
    """Record the deletions of a cleanup run to history.

    Runs that deleted nothing (including simulated runs) are not recorded.

    Args:
        run: Completed cleanup run.
        parts_dir: Parts directory the run reconciled.
        command: Command that triggered the run.
        state: StateManager to record into. Defaults to the user state dir.

    Returns:
        The recorded HistoryEntry, or None if nothing was recorded.
    """
    deleted = run.deleted_paths
    if not deleted:
        return None

    entry = create_history_entry(
        paths=deleted,
        report=run.report,
        success=not run.failures,
        metadata={"parts_dir": parts_dir, "command": command},
    )

    (state or StateManager()).record_action(entry)
    return entry
