"""Orphaned part file reconciliation and cleanup.

This module provides the parts directory scanner, the reference
extractor over the message store, the reconciliation engine, and
the disposer for orphaned attachment files.
"""

from partsweep.parts.cleanup import CleanupRun, cleanup_dangling_parts
from partsweep.parts.disposer import PartsDisposer, disposed_count
from partsweep.parts.guard import canonical_path, is_within_dir
from partsweep.parts.models import (
    PART_DATA_REFERENCE,
    DisposalMode,
    DisposalOutcome,
    DisposalResult,
    ReferenceSpec,
)
from partsweep.parts.reconcile import ReconcileResult, reconcile
from partsweep.parts.references import PartsDatabase, ReferenceQueryError, ReferenceSource
from partsweep.parts.scanner import PartsDirectoryScanner

__all__ = [
    "PART_DATA_REFERENCE",
    "CleanupRun",
    "DisposalMode",
    "DisposalOutcome",
    "DisposalResult",
    "PartsDatabase",
    "PartsDirectoryScanner",
    "PartsDisposer",
    "ReconcileResult",
    "ReferenceQueryError",
    "ReferenceSource",
    "ReferenceSpec",
    "canonical_path",
    "cleanup_dangling_parts",
    "disposed_count",
    "is_within_dir",
    "reconcile",
]
