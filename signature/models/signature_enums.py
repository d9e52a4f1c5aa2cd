# signature/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class CaptureMode(str, Enum):
    """How the signer provides the signature."""
    TYPED = "typed"
    DRAWN = "drawn"
    STYLED = "styled"


class StrokeState(str, Enum):
    """Drawing surface state while capturing freehand input."""
    IDLE = "idle"
    STROKING = "stroking"
