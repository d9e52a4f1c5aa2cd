"""
core/logging/logic/logger.py
============================

Audit trail for user-visible actions (signature saved, save failed, ...).

One process-wide `Logger` keeps a single SQLite connection to the
[Database] logging file and serialises access with a lock, so GUI callbacks
and worker threads can log concurrently. Diagnostic output goes through the
stdlib `logging` module instead; this table is what supervisors review.
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import core.helpers.date_time_helper as dt
from core.common.app_context import AppContext
from core.config.config_service import config_service
from core.logging.models.log_entry import LogEntry

_COLUMNS = ("timestamp", "user_id", "username", "feature", "event",
            "reference_id", "message", "log_level")

# query_logs keyword -> SQL condition
_FILTERS = {
    "user_id": "user_id = ?",
    "username": "username = ?",
    "feature": "feature = ?",
    "event": "event = ?",
    "reference_id": "reference_id = ?",
    "level": "log_level = ?",
    "start_time": "timestamp >= ?",
    "end_time": "timestamp <= ?",
}

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        user_id TEXT,
        username TEXT,
        feature TEXT NOT NULL,
        event TEXT NOT NULL,
        reference_id TEXT,
        message TEXT,
        log_level TEXT NOT NULL DEFAULT 'INFO'
    );
    CREATE INDEX IF NOT EXISTS idx_logs_reference ON logs (feature, reference_id);
"""


def _session_username() -> Optional[str]:
    user = AppContext.current_user
    return user.username if user is not None else None


class Logger:
    """Process-wide audit logger; every `Logger()` call returns the same object."""

    _instance: "Logger | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "Logger":
        with cls._instance_lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._ready = False
                cls._instance = instance
        return cls._instance

    def __init__(self) -> None:
        if self._ready:
            return
        self._ready = True
        self._lock = threading.Lock()
        self.db_path: Path = config_service.database.logging
        self._conn: sqlite3.Connection | None = None
        with self._cursor() as conn:
            conn.executescript(_SCHEMA)

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Connection]:
        """Locked access to the shared connection; commits when the block succeeds."""
        with self._lock:
            if self._conn is None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
            with self._conn:
                yield self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                try:
                    self._conn.close()
                finally:
                    self._conn = None

    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> LogEntry:
        """
        Persist one audit entry and return it.

        *username* defaults to the signed-in user from `AppContext`, then to
        "unknown".
        """
        entry = LogEntry(
            id=None,
            timestamp=dt.utc_now(),
            log_level=level,
            user_id=user_id,
            username=username or _session_username() or "unknown",
            feature=feature,
            event=event,
            reference_id=reference_id,
            message=message,
        )
        values = (entry.timestamp.isoformat(), entry.user_id, entry.username, entry.feature,
                  entry.event, entry.reference_id, entry.message, entry.log_level)
        with self._cursor() as conn:
            cur = conn.execute(
                f"INSERT INTO logs ({', '.join(_COLUMNS)}) VALUES ({', '.join('?' * len(_COLUMNS))})",
                values,
            )
        entry.id = cur.lastrowid
        return entry

    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        return self.query_logs(limit=limit)

    def query_logs(self, *, limit: int = 1_000, **filters: Optional[str]) -> List[LogEntry]:
        """
        Newest first. Accepted filters: user_id, username, feature, event,
        reference_id, level, start_time, end_time (ISO UTC strings).
        """
        unknown = set(filters) - set(_FILTERS)
        if unknown:
            raise TypeError(f"Unknown log filter(s): {', '.join(sorted(unknown))}")
        conditions, params = [], []
        for key, value in filters.items():
            if value is not None:
                conditions.append(_FILTERS[key])
                params.append(value)
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        with self._cursor() as conn:
            rows = conn.execute(
                f"SELECT * FROM logs {where} ORDER BY timestamp DESC, id DESC LIMIT ?",
                (*params, limit),
            ).fetchall()
        return [LogEntry.from_dict(dict(row)) for row in rows]

    def clear_logs(self) -> None:
        with self._cursor() as conn:
            conn.execute("DELETE FROM logs")


logger: Logger = Logger()
