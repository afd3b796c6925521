"""Disposal of orphaned part files.

Deletes, or simulates deleting, the orphan candidates produced by
reconciliation. Files that vanished since the scan are tolerated, and
nothing outside the parts directory is ever touched.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from partsweep.parts.guard import canonical_path, is_within_dir
from partsweep.parts.models import DisposalMode, DisposalOutcome, DisposalResult

logger = logging.getLogger(__name__)


class PartsDisposer:
    """Handles disposal of orphaned part files.

    In SIMULATE mode the filesystem is never modified; every candidate
    that still exists is reported as WOULD_DELETE instead.

    Args:
        parts_dir: Directory the candidates must live directly inside.
        mode: Whether to simulate or commit deletions.
    """

    def __init__(self, parts_dir: Path, mode: DisposalMode = DisposalMode.SIMULATE) -> None:
        self._root = canonical_path(str(parts_dir))
        self._mode = mode

    @property
    def mode(self) -> DisposalMode:
        """Disposal mode of this disposer."""
        return self._mode

    def dispose(self, orphans: Iterable[str]) -> list[DisposalResult]:
        """Dispose of every orphan candidate and return per-path results.

        Candidates are processed in sorted order. Failures are isolated per
        path and never raised.

        Args:
            orphans: Canonical paths of orphaned part files.

        Returns:
            List of DisposalResult, one per candidate.
        """
        return [self._dispose_single(path) for path in sorted(orphans)]

    def _dispose_single(self, path: str) -> DisposalResult:
        """Dispose of a single orphan candidate."""
        if not is_within_dir(path, self._root):
            logger.error("Refusing to dispose %s: not inside %s", path, self._root)
            return DisposalResult(
                path=path,
                outcome=DisposalOutcome.REFUSED,
                error=f"Path is outside the parts directory: {path}",
            )

        target = Path(canonical_path(path))
        if not target.exists():
            logger.warning("Part file path does not exist: %s", path)
            return DisposalResult(path=path, outcome=DisposalOutcome.MISSING)

        if self._mode is DisposalMode.SIMULATE:
            logger.info("Would have deleted dangling part: %s", path)
            return DisposalResult(path=path, outcome=DisposalOutcome.WOULD_DELETE)

        try:
            target.unlink()
        except FileNotFoundError:
            logger.warning("Part file vanished before deletion: %s", path)
            return DisposalResult(path=path, outcome=DisposalOutcome.MISSING)
        except OSError as e:
            logger.error("Failed to delete dangling part %s: %s", path, e)
            return DisposalResult(path=path, outcome=DisposalOutcome.FAILED, error=str(e))

        logger.info("Deleted dangling part: %s", path)
        return DisposalResult(path=path, outcome=DisposalOutcome.DELETED)


def disposed_count(results: Iterable[DisposalResult]) -> int:
    """Count the results that were deleted or would have been deleted."""
    return sum(1 for result in results if result.counted)
