"""Compliance reporting models."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class ComplianceStatus(Enum):
    COMPLIANT = "Compliant"
    OVERDUE = "Overdue"
    PENDING = "Pending"


class ProgressBand(Enum):
    """Colour band of the per-document progress bar."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class RamsDocumentRef:
    """The few document fields the report needs."""
    id: str
    title: str
    project_name: Optional[str] = None
    deadline: Optional[date] = None


@dataclass(frozen=True)
class ComplianceStats:
    total_documents: int
    total_users: int
    total_signatures: int
    expected_signatures: int
    pending_signatures: int
    compliance_rate: float


@dataclass(frozen=True)
class DocumentCompliance:
    document: RamsDocumentRef
    signatures_count: int
    expected_signatures: int
    compliance_percentage: float
    status: ComplianceStatus
    progress_band: ProgressBand

    @property
    def progress_width(self) -> float:
        """Bar fill in percent, capped at 100."""
        return min(100.0, self.compliance_percentage)
