"""Reconciliation of scanned part files against recorded references.

A single pass over the recorded references removes every matched path
from a working copy of the scan; what is left is the orphan set.
"""

import logging
from collections.abc import Set
from dataclasses import dataclass

from partsweep.parts.guard import canonical_path
from partsweep.parts.references import ReferenceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of reconciling a scan against the reference store.

    Attributes:
        orphans: Scanned part files that no reference points at.
        referenced_count: Scanned part files matched by a reference.
    """

    orphans: frozenset[str]
    referenced_count: int


def _match_key(reference: str) -> str | None:
    """Canonicalize a recorded path, or None if it cannot be resolved."""
    try:
        return canonical_path(reference)
    except (OSError, ValueError) as e:
        logger.warning("Couldn't get canonical path for reference %r: %s", reference, e)
        return None


def reconcile(
    scanned: Set[str],
    source: ReferenceSource,
    *,
    canonicalize: bool = True,
) -> ReconcileResult:
    """Split scanned part files into referenced and orphaned.

    The reference source is not queried at all when the scan is empty.
    References to paths that were not scanned are ignored: they neither
    count as a match nor show up as orphans. A reference that cannot be
    canonicalized (e.g. one containing a NUL byte) is logged and treated
    as unmatched. The caller's set is never modified.

    Args:
        scanned: Canonical part file paths found on disk.
        source: Stream of recorded attachment paths.
        canonicalize: Resolve recorded paths before comparing them with
            the scan. If False, recorded strings must match exactly.

    Returns:
        ReconcileResult with the orphan set and the referenced count.

    Raises:
        ReferenceQueryError: If the source fails while being read.
    """
    if not scanned:
        logger.debug("No part files scanned, skipping reference query")
        return ReconcileResult(orphans=frozenset(), referenced_count=0)

    remaining = set(scanned)
    referenced_count = 0
    unmatched = 0

    for reference in source.iter_references():
        key = _match_key(reference) if canonicalize else reference
        if key is not None and key in remaining:
            remaining.remove(key)
            referenced_count += 1
        else:
            unmatched += 1

    if unmatched:
        logger.debug("%d reference(s) did not match a scanned part file", unmatched)

    return ReconcileResult(orphans=frozenset(remaining), referenced_count=referenced_count)
