"""Path canonicalization and parts directory containment checks.

Part files are compared and disposed by their canonical form: absolute,
with every symlink resolved. The disposer only ever acts on paths that
canonicalize to a direct child of the canonical parts directory.
"""

import os


def canonical_path(path: str) -> str:
    """Return the absolute, symlink-resolved form of a path.

    Resolution is non-strict: components that do not exist are kept
    as-is, so a path recorded for a file that has since been deleted
    still canonicalizes.

    Args:
        path: Path to canonicalize. Relative paths resolve against the
            current working directory.

    Returns:
        Canonical path string.
    """
    return os.path.realpath(path)


def is_within_dir(path: str, directory: str) -> bool:
    """Check whether a path canonicalizes to a direct child of a directory.

    The parts directory is a flat layout, so anything nested deeper or
    resolving elsewhere through a symlink is outside of it.

    Args:
        path: Path to check.
        directory: Directory the path must live directly inside.

    Returns:
        True if the canonical path's parent is the canonical directory.
    """
    resolved = canonical_path(path)
    return os.path.dirname(resolved) == canonical_path(directory)
