# signature/logic/signature_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from core.logging.logic.logger import logger as audit_logger

from ..exceptions.errors import SignaturePersistenceError
from ..models.signature_record import SignatureRecord
from ..models.signature_style import SIGNATURE_STYLES, SignatureStyleCatalog
from .capture_session import SignatureCaptureSession
from .repository.signature_repository import SignatureRepository
from .signature_renderer import RenderedSignature, render

logger = logging.getLogger(__name__)

_FEATURE_ID = "rams_signature"


@dataclass(frozen=True)
class SignatureListEntry:
    """Audit list row: stored record plus its display description."""
    record: SignatureRecord
    rendering: RenderedSignature


class SignatureService:
    """
    Core signing logic (no UI).

    Glues a capture session to the repository and the renderer. The
    repository call is the only place that can fail at runtime; on failure
    the session is left untouched so the user can press Sign again.
    """

    def __init__(self, repository: SignatureRepository, *,
                 catalog: SignatureStyleCatalog = SIGNATURE_STYLES,
                 audit: Optional[object] = None) -> None:
        self._repo = repository
        self._catalog = catalog
        self._audit = audit if audit is not None else audit_logger

    @property
    def catalog(self) -> SignatureStyleCatalog:
        return self._catalog

    def new_session(self) -> SignatureCaptureSession:
        return SignatureCaptureSession(catalog=self._catalog)

    # -------- Signing --------------------------------------------------------
    def submit(self, session: SignatureCaptureSession, *, document_id: str,
               user_id: str) -> SignatureRecord:
        """
        Commit the session and store the result exactly once.

        Raises:
            SignatureNotReadyError: session not ready (nothing is stored)
            SignaturePersistenceError: repository failed; session kept
        """
        encoded = session.commit()
        mode = session.mode.value
        try:
            record = self._repo.add(document_id=document_id, user_id=user_id,
                                    signature_data=encoded)
        except Exception as exc:
            logger.warning("Saving signature for %s failed: %s", document_id, exc)
            self._audit.log(_FEATURE_ID, "SignatureSaveFailed", user_id=user_id,
                            level="ERROR", reference_id=document_id, message=str(exc))
            raise SignaturePersistenceError(f"Error signing document: {exc}") from exc

        session.discard()
        self._audit.log(_FEATURE_ID, "SignatureSaved", user_id=user_id,
                        reference_id=document_id, message=f"mode={mode} id={record.id}")
        return record

    # -------- Review ---------------------------------------------------------
    def list_signatures(self, document_id: str) -> List[SignatureListEntry]:
        try:
            records = self._repo.list_for_document(document_id)
        except Exception as exc:
            logger.warning("Listing signatures for %s failed: %s", document_id, exc)
            raise SignaturePersistenceError(f"Cannot load signatures: {exc}") from exc
        return [SignatureListEntry(r, render(r.signature_data, self._catalog)) for r in records]

    def has_signed(self, document_id: str, user_id: str) -> bool:
        try:
            return self._repo.has_signed(document_id, user_id)
        except Exception as exc:
            raise SignaturePersistenceError(f"Cannot check signature status: {exc}") from exc
