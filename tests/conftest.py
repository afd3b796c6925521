"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: a parts
directory, a factory for SQLite message stores with a part table, and
isolation of the XDG config/state directories.
"""

import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest

# Schema of the MMS part table, reduced to the columns the tests touch
_PART_TABLE_SQL = """
CREATE TABLE part (
    _id INTEGER PRIMARY KEY,
    mid INTEGER,
    ct TEXT,
    _data TEXT,
    text TEXT
)
"""

_DRM_TABLE_SQL = "CREATE TABLE drm (_id INTEGER PRIMARY KEY, _data TEXT)"


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories at a temporary location."""
    xdg_root = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_root / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg_root / "state"))
    return xdg_root


@pytest.fixture
def parts_dir(tmp_path: Path) -> Path:
    """Create an empty parts directory."""
    directory = tmp_path / "app_parts"
    directory.mkdir()
    return directory


@pytest.fixture
def make_part(parts_dir: Path) -> Callable[[str], Path]:
    """Factory writing a part file into the parts directory."""

    def _make(name: str, content: bytes = b"\x89PNG attachment") -> Path:
        path = parts_dir / name
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def make_database(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a message store with the given part._data values.

    Rows with None or "" model text parts, which store their data inline.
    Pass drm_paths to also create and fill the drm table.
    """

    def _make(
        paths: list[str | None],
        *,
        drm_paths: list[str] | None = None,
        name: str = "mmssms.db",
    ) -> Path:
        db_path = tmp_path / name
        with sqlite3.connect(db_path) as conn:
            conn.execute(_PART_TABLE_SQL)
            conn.executemany(
                "INSERT INTO part (mid, ct, _data) VALUES (?, ?, ?)",
                [(index, "image/jpeg", path) for index, path in enumerate(paths, start=1)],
            )
            if drm_paths is not None:
                conn.execute(_DRM_TABLE_SQL)
                conn.executemany(
                    "INSERT INTO drm (_data) VALUES (?)",
                    [(path,) for path in drm_paths],
                )
        conn.close()
        return db_path

    return _make
