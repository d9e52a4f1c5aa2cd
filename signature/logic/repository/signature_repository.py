"""Signature repository protocol (interface).

Persistence boundary for encoded signatures. The GUI and services only
depend on this contract; SQLiteSignatureRepository is the local backend.
"""

from __future__ import annotations

from typing import List, Protocol

from ...models.signature_record import SignatureRecord


class SignatureRepository(Protocol):
    """Protocol for signature data access."""

    def add(self, *, document_id: str, user_id: str, signature_data: str) -> SignatureRecord:
        """
        Store one signature; signed_at is set by the repository (UTC now).

        Returns:
            The stored SignatureRecord
        """
        ...

    def list_for_document(self, document_id: str) -> List[SignatureRecord]:
        """All signatures of a document, most recent first."""
        ...

    def has_signed(self, document_id: str, user_id: str) -> bool:
        ...

    def count_for_document(self, document_id: str) -> int:
        ...

    def count_all(self) -> int:
        ...
