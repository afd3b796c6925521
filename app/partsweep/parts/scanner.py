"""Parts directory scanner.

Enumerates the attachment blobs physically present in the parts
directory. The directory is a flat layout: every regular file directly
inside it is one part file, subdirectories are not descended into.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Suffixes of files still being written by the provider
DEFAULT_IGNORE_SUFFIXES: tuple[str, ...] = (".tmp",)


class PartsDirectoryScanner:
    """Scans the parts directory for attachment files.

    Produces the canonical path of every regular file directly inside
    the directory. A directory that cannot be enumerated yields an empty
    scan rather than an error, so that a broken scan can never make
    live attachments look orphaned downstream.

    Args:
        parts_dir: Directory holding attachment blobs.
        ignore_suffixes: File name suffixes to skip (in-flight writes).
    """

    def __init__(
        self,
        parts_dir: Path,
        *,
        ignore_suffixes: tuple[str, ...] = DEFAULT_IGNORE_SUFFIXES,
    ) -> None:
        self._parts_dir = parts_dir
        self._ignore_suffixes = ignore_suffixes

    @property
    def parts_dir(self) -> Path:
        """Directory this scanner enumerates."""
        return self._parts_dir

    def scan(self) -> frozenset[str]:
        """Scan the parts directory and return canonical part file paths.

        Returns:
            Duplicate-free set of canonical paths. Empty if the directory
            cannot be enumerated.
        """
        try:
            root = self._parts_dir.resolve(strict=True)
            entries = sorted(root.iterdir())
        except OSError as e:
            logger.error("Cannot enumerate parts directory %s: %s", self._parts_dir, e)
            return frozenset()

        logger.debug("Scanning parts directory %s", root)

        found: set[str] = set()
        for entry in entries:
            canonical = self._canonicalize_entry(entry, root)
            if canonical is not None:
                found.add(canonical)

        logger.debug("Found %d part file(s) in %s", len(found), root)
        return frozenset(found)

    def _canonicalize_entry(self, entry: Path, root: Path) -> str | None:
        """Resolve a single directory entry to a canonical part file path.

        Args:
            entry: Entry listed in the parts directory.
            root: Canonical parts directory.

        Returns:
            Canonical path string, or None if the entry is not a part file.
        """
        if self._ignore_suffixes and entry.name.endswith(self._ignore_suffixes):
            logger.debug("Skipping in-flight file: %s", entry)
            return None

        try:
            resolved = entry.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.warning("Couldn't get canonical path for %s: %s", entry, e)
            return None

        if resolved.parent != root:
            logger.warning("Skipping %s: resolves outside parts directory to %s", entry, resolved)
            return None

        if not resolved.is_file():
            logger.debug("Skipping non-file entry: %s", entry)
            return None

        return str(resolved)
