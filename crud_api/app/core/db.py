"""
SQLite store for the ``resources`` table.

:class:`ResourceStore` owns a single SQLite connection that is opened once
at process start and shared for the lifetime of the process (tests build
their own ``:memory:`` instance).  The store is handed to the repository
explicitly; there is no module-level connection.

The connection is created with ``check_same_thread=False`` because FastAPI
may call into it from the event loop thread and from its threadpool.
Statements are serialized with a lock so that a commit never interleaves
with another caller's statement.  Every ``sqlite3.Error`` is re-raised as
:class:`~crud_api.app.core.errors.StorageError`.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import StorageError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS resources (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    category TEXT,
    status TEXT NOT NULL DEFAULT 'active',
    created_at TIMESTAMP NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now')),
    updated_at TIMESTAMP NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
)
"""


def get_database_path(database_url: str) -> str:
    """Resolve ``database_url`` to something ``sqlite3.connect`` accepts.

    Absolute paths and ``:memory:`` are returned unchanged; relative paths
    are resolved against the project root (the directory holding the
    ``crud_api`` package).
    """
    if database_url == MEMORY_DATABASE or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class ResourceStore:
    """A durable table of resource rows behind one shared connection."""

    def __init__(self, database_url: str = MEMORY_DATABASE) -> None:
        self.path = get_database_path(database_url)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "ResourceStore":
        if self._conn is not None:
            return self
        try:
            conn = sqlite3.connect(self.path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        # Rows come back as dict-like objects keyed by column name
        conn.row_factory = sqlite3.Row
        self._conn = conn
        logger.info("Opened SQLite database at %s", self.path)
        return self

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Closed SQLite database at %s", self.path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Database connection is not open")
        return self._conn

    def ensure_schema(self) -> None:
        """Create the ``resources`` table if it does not exist.

        Idempotent.  Failures are surfaced as ``StorageError`` and never
        retried.
        """
        with self._lock:
            conn = self._connection()
            try:
                conn.execute(SCHEMA)
                conn.commit()
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
        logger.info("Database schema initialized")

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Run a query and return the first row as a dict (or ``None``)."""
        with self._lock:
            try:
                row = self._connection().execute(sql, tuple(params)).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
        return dict(row) if row is not None else None

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self._lock:
            try:
                rows = self._connection().execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
        return [dict(row) for row in rows]

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Tuple[int, Optional[int]]:
        """Run a statement and commit it.

        Returns ``(rows_affected, last_inserted_id)``.
        """
        with self._lock:
            conn = self._connection()
            try:
                cursor = conn.execute(sql, tuple(params))
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError(str(exc)) from exc
            return cursor.rowcount, cursor.lastrowid

    def clear(self) -> None:
        """Delete every row.  The id sequence is kept, so ids are not reused."""
        self.execute("DELETE FROM resources")
