"""Unit tests for PartsDisposer.

Tests simulated and committed disposal, tolerance of vanished files,
refusal of paths outside the parts directory, and per-path failure
isolation.
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from partsweep.parts.disposer import PartsDisposer, disposed_count
from partsweep.parts.models import DisposalMode, DisposalOutcome


def _canonical(path: Path) -> str:
    return str(path.resolve())


def _snapshot(directory: Path) -> dict[str, tuple[bytes, int]]:
    return {p.name: (p.read_bytes(), p.stat().st_mtime_ns) for p in directory.iterdir()}


class TestSimulate:
    """Tests for SIMULATE mode."""

    def test_simulate_leaves_files(
        self, parts_dir: Path, make_part: Callable[..., Path]
    ) -> None:
        """Simulation reports WOULD_DELETE and never touches the disk."""
        part = make_part("PART_1")
        make_part("PART_2", b"kept")
        before = _snapshot(parts_dir)

        results = PartsDisposer(parts_dir).dispose([_canonical(part)])

        assert [r.outcome for r in results] == [DisposalOutcome.WOULD_DELETE]
        assert part.exists()
        assert disposed_count(results) == 1
        assert _snapshot(parts_dir) == before

    def test_default_mode_is_simulate(self, parts_dir: Path) -> None:
        """A disposer without an explicit mode simulates."""
        assert PartsDisposer(parts_dir).mode is DisposalMode.SIMULATE

    def test_simulate_missing_file(self, parts_dir: Path) -> None:
        """A vanished candidate is MISSING even in simulation."""
        gone = str(parts_dir.resolve() / "PART_gone")

        results = PartsDisposer(parts_dir).dispose([gone])

        assert results[0].outcome is DisposalOutcome.MISSING
        assert disposed_count(results) == 0


class TestCommit:
    """Tests for COMMIT mode."""

    def test_commit_deletes(self, parts_dir: Path, make_part: Callable[..., Path]) -> None:
        """Committed disposal removes every candidate."""
        a = make_part("PART_1")
        b = make_part("PART_2")
        keep = make_part("PART_3")

        results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose(
            [_canonical(b), _canonical(a)]
        )

        assert [r.path for r in results] == sorted([_canonical(a), _canonical(b)])
        assert all(r.outcome is DisposalOutcome.DELETED for r in results)
        assert not a.exists()
        assert not b.exists()
        assert keep.exists()
        assert disposed_count(results) == 2

    def test_commit_missing_file(self, parts_dir: Path, make_part: Callable[..., Path]) -> None:
        """A file deleted since the scan is tolerated and not counted."""
        part = make_part("PART_1")
        path = _canonical(part)
        part.unlink()

        results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose([path])

        assert results[0].outcome is DisposalOutcome.MISSING
        assert not results[0].failed

    def test_commit_failure_is_isolated(
        self, parts_dir: Path, make_part: Callable[..., Path]
    ) -> None:
        """An unlink error on one path does not stop the others."""
        bad = make_part("PART_1")
        good = make_part("PART_2")
        original_unlink = Path.unlink

        def flaky_unlink(self: Path, missing_ok: bool = False) -> None:
            if self.name == "PART_1":
                raise PermissionError("Operation not permitted")
            original_unlink(self, missing_ok=missing_ok)

        with patch.object(Path, "unlink", flaky_unlink):
            results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose(
                [_canonical(bad), _canonical(good)]
            )

        by_path = {r.path: r for r in results}
        assert by_path[_canonical(bad)].outcome is DisposalOutcome.FAILED
        assert "Operation not permitted" in (by_path[_canonical(bad)].error or "")
        assert by_path[_canonical(good)].outcome is DisposalOutcome.DELETED
        assert bad.exists()
        assert not good.exists()
        assert disposed_count(results) == 1

    def test_vanishes_during_unlink(
        self, parts_dir: Path, make_part: Callable[..., Path]
    ) -> None:
        """A file removed between the existence check and unlink is MISSING."""
        part = make_part("PART_1")

        with patch.object(Path, "unlink", side_effect=FileNotFoundError("gone")):
            results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose([_canonical(part)])

        assert results[0].outcome is DisposalOutcome.MISSING


class TestContainment:
    """Tests for refusing paths outside the parts directory."""

    def test_refuses_outside_path(self, tmp_path: Path, parts_dir: Path) -> None:
        """A candidate outside the parts directory is refused and kept."""
        outside = tmp_path / "precious.db"
        outside.write_bytes(b"keep me")

        results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose([str(outside)])

        assert results[0].outcome is DisposalOutcome.REFUSED
        assert results[0].failed
        assert outside.exists()
        assert disposed_count(results) == 0

    def test_refuses_nested_path(self, parts_dir: Path) -> None:
        """A candidate in a subdirectory is not a direct child and is refused."""
        nested = parts_dir / "nested"
        nested.mkdir()
        inner = nested / "PART_1"
        inner.write_bytes(b"x")

        results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose([str(inner)])

        assert results[0].outcome is DisposalOutcome.REFUSED
        assert inner.exists()

    def test_refuses_symlink_escaping(self, tmp_path: Path, parts_dir: Path) -> None:
        """A symlink in the parts directory pointing elsewhere is refused."""
        outside = tmp_path / "outside.bin"
        outside.write_bytes(b"keep me")
        link = parts_dir / "escape"
        link.symlink_to(outside)

        results = PartsDisposer(parts_dir, DisposalMode.COMMIT).dispose([str(link)])

        assert results[0].outcome is DisposalOutcome.REFUSED
        assert outside.exists()

    def test_parts_dir_through_symlink(
        self, tmp_path: Path, parts_dir: Path, make_part: Callable[..., Path]
    ) -> None:
        """A symlinked parts directory still accepts its real children."""
        part = make_part("PART_1")
        link_dir = tmp_path / "parts_link"
        link_dir.symlink_to(parts_dir, target_is_directory=True)

        results = PartsDisposer(link_dir, DisposalMode.COMMIT).dispose([_canonical(part)])

        assert results[0].outcome is DisposalOutcome.DELETED
        assert not part.exists()
