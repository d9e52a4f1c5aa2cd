"""
===============================================================================
Base SQLite Repository - shared connection and schema bootstrap
-------------------------------------------------------------------------------
Subclasses declare their DDL in `SCHEMA`; it runs once per instance before
any query. The database file defaults to [Database] signatures from the
config service and its folder is created on first connect.
===============================================================================
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence

from core.config.config_service import config_service


class BaseSQLiteRepo:
    """Lazily connected SQLite helper with Row factory and enforced foreign keys."""

    SCHEMA: str = ""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = Path(db_path) if db_path else Path(config_service.database.signatures)
        self._conn: Optional[sqlite3.Connection] = None
        if self.SCHEMA:
            with self.transaction() as conn:
                conn.executescript(self.SCHEMA)

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._db_path)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            self._conn = conn
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back and re-raise on error."""
        conn = self.conn
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        else:
            conn.commit()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        return self.conn.execute(sql, params).fetchall()

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self.conn.execute(sql, params).fetchone()

    def scalar(self, sql: str, params: Sequence[Any] = ()) -> Any:
        row = self.fetch_one(sql, params)
        return None if row is None else row[0]

    def close(self) -> None:
        """Idempotent; the next `conn` access reconnects."""
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None
