"""Reference extraction from the message store.

Reads the file paths recorded by attachment rows in the SQLite message
store. The store is opened read-only through an explicitly constructed
handle whose lifetime belongs to the caller.
"""

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Protocol

from partsweep.parts.models import PART_DATA_REFERENCE, ReferenceSpec

logger = logging.getLogger(__name__)


class ReferenceQueryError(Exception):
    """Raised when recorded references cannot be read from the store.

    A reconciliation pass must not continue past this error: treating an
    unreadable store as "no references" would classify every part file
    as orphaned.
    """


class ReferenceSource(Protocol):
    """Anything that can stream recorded attachment paths."""

    def iter_references(self) -> Iterator[str]:
        """Yield every non-empty recorded attachment path."""
        ...


class PartsDatabase:
    """Read-only handle on the message store's attachment references.

    The connection is opened lazily on the first query, so a pass with
    nothing to reconcile never touches the store. Use as a context
    manager, or call close() explicitly.

    Args:
        path: SQLite database file.
        references: Table columns holding attachment paths.
        timeout: Seconds to wait on a locked database.
        batch_size: Rows fetched per round trip while streaming.
    """

    def __init__(
        self,
        path: Path,
        references: Sequence[ReferenceSpec] = (PART_DATA_REFERENCE,),
        *,
        timeout: float = 5.0,
        batch_size: int = 500,
    ) -> None:
        if not references:
            msg = "At least one reference column is required"
            raise ValueError(msg)
        self._path = path
        self._references = tuple(references)
        self._timeout = timeout
        self._batch_size = batch_size
        self._connection: sqlite3.Connection | None = None
        self._query_count = 0

    @property
    def path(self) -> Path:
        """Database file this handle reads."""
        return self._path

    @property
    def query_count(self) -> int:
        """Number of reference queries issued through this handle."""
        return self._query_count

    def __enter__(self) -> "PartsDatabase":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection if it was opened."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def iter_references(self) -> Iterator[str]:
        """Yield every non-empty path recorded in the configured columns.

        All columns are read inside a single read transaction. The cursor
        and transaction are released however iteration ends: exhausted,
        raised, or abandoned by the consumer.

        Yields:
            Recorded path strings, in table order.

        Raises:
            ReferenceQueryError: If the store cannot be opened or queried.
        """
        connection = self._connect()
        try:
            connection.execute("BEGIN")
        except sqlite3.Error as e:
            msg = f"Cannot begin read transaction on {self._path}: {e}"
            raise ReferenceQueryError(msg) from e

        try:
            for spec in self._references:
                yield from self._iter_column(connection, spec)
        finally:
            if connection.in_transaction:
                connection.rollback()

    def _iter_column(self, connection: sqlite3.Connection, spec: ReferenceSpec) -> Iterator[str]:
        """Stream the recorded paths of one reference column."""
        self._query_count += 1
        logger.debug("Querying references from %s", spec)
        try:
            cursor = connection.execute(spec.select_sql())
        except sqlite3.Error as e:
            msg = f"Cannot query references from {spec}: {e}"
            raise ReferenceQueryError(msg) from e

        try:
            while True:
                try:
                    rows = cursor.fetchmany(self._batch_size)
                except sqlite3.Error as e:
                    msg = f"Failed reading references from {spec}: {e}"
                    raise ReferenceQueryError(msg) from e
                if not rows:
                    return
                for (value,) in rows:
                    if isinstance(value, str) and value:
                        yield value
        finally:
            cursor.close()

    def _connect(self) -> sqlite3.Connection:
        """Open the read-only connection on first use."""
        if self._connection is not None:
            return self._connection

        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        try:
            self._connection = sqlite3.connect(uri, uri=True, timeout=self._timeout)
        except sqlite3.Error as e:
            msg = f"Cannot open message store {self._path}: {e}"
            raise ReferenceQueryError(msg) from e

        # Transactions are managed explicitly in iter_references()
        self._connection.isolation_level = None
        return self._connection
