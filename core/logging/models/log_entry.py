"""One row of the audit log table."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

import core.helpers.date_time_helper as dt


@dataclass
class LogEntry:
    id: Optional[int]
    timestamp: datetime          # aware, UTC
    log_level: str
    user_id: Optional[str]
    username: Optional[str]
    feature: str
    event: str
    reference_id: Optional[str]
    message: Optional[str]

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "LogEntry":
        ts = row["timestamp"]
        return cls(
            id=row.get("id"),
            timestamp=dt.parse_utc_iso(ts) if isinstance(ts, str) else ts,
            log_level=row.get("log_level") or "INFO",
            user_id=row.get("user_id"),
            username=row.get("username"),
            feature=row.get("feature") or "",
            event=row.get("event") or "",
            reference_id=row.get("reference_id"),
            message=row.get("message"),
        )

    def as_dict(self) -> dict:
        """Export form: ISO UTC under `timestamp_utc`, display-zone text under `timestamp`."""
        data = asdict(self)
        data["timestamp_utc"] = self.timestamp.replace(microsecond=0).isoformat()
        data["timestamp"] = dt.format_local(self.timestamp)
        return data
