from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class SignatureRecord:
    """
    One stored acknowledgement of a RAMS document by a user.
    `signature_data` is the encoded signature string, kept opaque here.
    """
    id: int
    document_id: str
    user_id: str
    signature_data: str
    signed_at: datetime
    signer_name: Optional[str] = None
    signer_email: Optional[str] = None
