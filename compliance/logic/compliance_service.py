"""Compliance arithmetic for the RAMS dashboard.

Every user is expected to sign every document. Counts come from the
signature repository; documents and user totals are passed in by the
caller.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from signature.logic.repository.signature_repository import SignatureRepository
from ..models.compliance_models import (
    ComplianceStats,
    ComplianceStatus,
    DocumentCompliance,
    ProgressBand,
    RamsDocumentRef,
)

logger = logging.getLogger(__name__)


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def overall_stats(total_documents: int, total_users: int, total_signatures: int) -> ComplianceStats:
    expected = total_documents * total_users
    return ComplianceStats(
        total_documents=total_documents,
        total_users=total_users,
        total_signatures=total_signatures,
        expected_signatures=expected,
        pending_signatures=max(0, expected - total_signatures),
        compliance_rate=_percent(total_signatures, expected),
    )


def progress_band(percentage: float) -> ProgressBand:
    if percentage >= 100:
        return ProgressBand.GREEN
    if percentage >= 50:
        return ProgressBand.YELLOW
    return ProgressBand.RED


def document_compliance(document: RamsDocumentRef, signatures_count: int, total_users: int,
                        today: Optional[date] = None) -> DocumentCompliance:
    today = today or date.today()
    pct = _percent(signatures_count, total_users)
    if pct >= 100:
        status = ComplianceStatus.COMPLIANT
    elif document.deadline is not None and document.deadline < today:
        status = ComplianceStatus.OVERDUE
    else:
        status = ComplianceStatus.PENDING
    return DocumentCompliance(
        document=document,
        signatures_count=signatures_count,
        expected_signatures=total_users,
        compliance_percentage=pct,
        status=status,
        progress_band=progress_band(pct),
    )


def filter_by_status(items: Iterable[DocumentCompliance],
                     status_filter: str | ComplianceStatus = "all") -> List[DocumentCompliance]:
    """'all' keeps everything; otherwise a ComplianceStatus or its value/name."""
    if isinstance(status_filter, str):
        if status_filter.lower() == "all":
            return list(items)
        wanted = next(
            (s for s in ComplianceStatus if status_filter.lower() in (s.value.lower(), s.name.lower())),
            None,
        )
        if wanted is None:
            raise ValueError(f"Unknown status filter '{status_filter}'.")
    else:
        wanted = status_filter
    return [item for item in items if item.status is wanted]


class ComplianceService:
    """Builds the compliance report from stored signatures."""

    def __init__(self, repository: SignatureRepository) -> None:
        self._repo = repository

    def overall(self, documents: Sequence[RamsDocumentRef], total_users: int) -> ComplianceStats:
        return overall_stats(len(documents), total_users, self._repo.count_all())

    def per_document(self, documents: Sequence[RamsDocumentRef], total_users: int,
                     today: Optional[date] = None) -> List[DocumentCompliance]:
        report = [
            document_compliance(doc, self._repo.count_for_document(doc.id), total_users, today)
            for doc in documents
        ]
        logger.debug("Compliance report for %d documents", len(report))
        return report
