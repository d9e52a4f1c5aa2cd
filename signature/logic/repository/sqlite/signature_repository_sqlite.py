"""SQLite implementation of SignatureRepository.

Two tables, named after the hosted backend the dashboard was built on:
  - rams_signatures : one row per (document, user) acknowledgement
  - profiles        : signer display name and email

Repository is DB-only; encoding/decoding of signature_data happens in
the logic layer.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.helpers import date_time_helper as dt
from ....models.signature_record import SignatureRecord
from .base_sqlite_repo import BaseSQLiteRepo

logger = logging.getLogger(__name__)

_SELECT_WITH_SIGNER = """
    SELECT s.*, p.full_name AS signer_name, p.email AS signer_email
    FROM rams_signatures s
    LEFT JOIN profiles p ON p.id = s.user_id
"""


class SQLiteSignatureRepository(BaseSQLiteRepo):
    """SQLite backend for RAMS signatures."""

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS profiles (
            id TEXT PRIMARY KEY,
            full_name TEXT,
            email TEXT
        );

        CREATE TABLE IF NOT EXISTS rams_signatures (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rams_document_id TEXT NOT NULL,
            user_id TEXT NOT NULL,
            signature_data TEXT NOT NULL,
            signed_at TEXT NOT NULL,
            ip_address TEXT,
            UNIQUE (rams_document_id, user_id)
        );

        CREATE INDEX IF NOT EXISTS idx_rams_signatures_document
            ON rams_signatures (rams_document_id, signed_at);
    """

    # =========================================================================
    # Profiles
    # =========================================================================

    def save_profile(self, user_id: str, full_name: Optional[str], email: Optional[str]) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                INSERT INTO profiles (id, full_name, email) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET full_name = excluded.full_name,
                                              email = excluded.email
                """,
                (user_id, full_name, email),
            )

    def count_profiles(self) -> int:
        return int(self.scalar("SELECT COUNT(*) FROM profiles"))

    # =========================================================================
    # Signatures
    # =========================================================================

    def add(self, *, document_id: str, user_id: str, signature_data: str,
            ip_address: str = "desktop") -> SignatureRecord:
        signed_at = dt.utc_now()
        with self.transaction() as conn:
            cur = conn.execute(
                """
                INSERT INTO rams_signatures
                    (rams_document_id, user_id, signature_data, signed_at, ip_address)
                VALUES (?, ?, ?, ?, ?)
                """,
                (document_id, user_id, signature_data, signed_at.isoformat(), ip_address),
            )
        logger.debug("Stored signature %s for document %s", cur.lastrowid, document_id)
        row = self.fetch_one(_SELECT_WITH_SIGNER + " WHERE s.id = ?", (cur.lastrowid,))
        return self._row_to_record(row)

    def list_for_document(self, document_id: str) -> List[SignatureRecord]:
        rows = self.fetch_all(
            _SELECT_WITH_SIGNER + " WHERE s.rams_document_id = ? ORDER BY s.signed_at DESC, s.id DESC",
            (document_id,),
        )
        return [self._row_to_record(r) for r in rows]

    def has_signed(self, document_id: str, user_id: str) -> bool:
        return self.fetch_one(
            "SELECT 1 FROM rams_signatures WHERE rams_document_id = ? AND user_id = ? LIMIT 1",
            (document_id, user_id),
        ) is not None

    def count_for_document(self, document_id: str) -> int:
        return int(self.scalar(
            "SELECT COUNT(*) FROM rams_signatures WHERE rams_document_id = ?", (document_id,)
        ))

    def count_all(self) -> int:
        return int(self.scalar("SELECT COUNT(*) FROM rams_signatures"))

    @staticmethod
    def _row_to_record(row) -> SignatureRecord:
        return SignatureRecord(
            id=int(row["id"]),
            document_id=row["rams_document_id"],
            user_id=row["user_id"],
            signature_data=row["signature_data"],
            signed_at=dt.parse_utc_iso(row["signed_at"]),
            signer_name=row["signer_name"],
            signer_email=row["signer_email"],
        )
