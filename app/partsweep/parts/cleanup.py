"""Full reconciliation pass over the parts directory.

Runs scan, reference extraction, diff and disposal in order and reports
the three counts of the pass. Each call is self-contained: nothing is
cached between passes.
"""

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path

from partsweep.models.report import PART_FILE_COUNT, ReconciliationReport
from partsweep.parts.disposer import PartsDisposer, disposed_count
from partsweep.parts.models import DisposalMode, DisposalOutcome, DisposalResult
from partsweep.parts.reconcile import reconcile
from partsweep.parts.references import ReferenceSource
from partsweep.parts.scanner import DEFAULT_IGNORE_SUFFIXES, PartsDirectoryScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanupRun:
    """Everything a reconciliation pass produced.

    Attributes:
        report: The three counts of the pass.
        mode: Disposal mode the pass ran with.
        orphans: Orphan candidates found by reconciliation.
        results: Per-path disposal results, sorted by path.
    """

    report: ReconciliationReport
    mode: DisposalMode
    orphans: frozenset[str]
    results: tuple[DisposalResult, ...]

    @property
    def deleted_paths(self) -> list[str]:
        """Paths actually removed from disk by this pass."""
        return [r.path for r in self.results if r.outcome is DisposalOutcome.DELETED]

    @property
    def failures(self) -> list[DisposalResult]:
        """Results for candidates that were refused or failed to delete."""
        return [r for r in self.results if r.failed]


def cleanup_dangling_parts(
    parts_dir: Path,
    source: ReferenceSource,
    mode: DisposalMode = DisposalMode.SIMULATE,
    accumulator: MutableMapping[str, int] | None = None,
    *,
    canonicalize: bool = True,
    ignore_suffixes: tuple[str, ...] = DEFAULT_IGNORE_SUFFIXES,
) -> CleanupRun:
    """Find part files no reference points at and dispose of them.

    The part file count is written to the accumulator as soon as the scan
    finishes; the referenced and deleted counts follow once the pass
    completes. If the reference store fails, the error propagates and
    nothing is disposed.

    Args:
        parts_dir: Directory holding attachment blobs.
        source: Recorded attachment references, e.g. a PartsDatabase.
        mode: SIMULATE to only report, COMMIT to delete orphans.
        accumulator: Optional mapping that receives the three counts under
            "part_file_count", "part_table_entry_count" and "deleted_count".
        canonicalize: Resolve recorded paths before matching.
        ignore_suffixes: File name suffixes the scanner skips.

    Returns:
        CleanupRun describing the pass.

    Raises:
        ReferenceQueryError: If recorded references cannot be read.
    """
    scanned = PartsDirectoryScanner(parts_dir, ignore_suffixes=ignore_suffixes).scan()
    if accumulator is not None:
        accumulator[PART_FILE_COUNT] = len(scanned)

    reconciled = reconcile(scanned, source, canonicalize=canonicalize)

    results = PartsDisposer(parts_dir, mode).dispose(reconciled.orphans)

    report = ReconciliationReport(
        part_file_count=len(scanned),
        part_table_entry_count=reconciled.referenced_count,
        deleted_count=disposed_count(results),
    )
    if accumulator is not None:
        report.apply_to(accumulator)

    logger.info(
        "Reconciled %s: %d part file(s), %d referenced, %d %s",
        parts_dir,
        report.part_file_count,
        report.part_table_entry_count,
        report.deleted_count,
        "deleted" if mode is DisposalMode.COMMIT else "would be deleted",
    )

    return CleanupRun(
        report=report,
        mode=mode,
        orphans=reconciled.orphans,
        results=tuple(results),
    )
